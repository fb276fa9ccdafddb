"""Tests for shared validation helpers."""

import pytest
from src.utils.validation import clean_optional, is_blank, is_valid_email


@pytest.mark.unit
@pytest.mark.parametrize("email", [
    "jane@x.com",
    "first.last+tag@mail.example.co.uk",
    "o'brien@example.ie",
    "user_1@sub-domain.example.org",
])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.unit
@pytest.mark.parametrize("email", [
    "",
    None,
    "not-an-email",
    "jane@localhost",
    "jane@-x.com",
    "jane@x-.com",
    "jane@@x.com",
    "jane doe@x.com",
    "@x.com",
])
def test_invalid_emails(email):
    assert not is_valid_email(email)


@pytest.mark.unit
def test_email_surrounding_whitespace_is_ignored():
    assert is_valid_email("  jane@x.com ")


@pytest.mark.unit
def test_clean_optional():
    assert clean_optional("  @jane ") == "@jane"
    assert clean_optional("   ") is None
    assert clean_optional(None) is None
    assert clean_optional(42) is None


@pytest.mark.unit
def test_is_blank():
    assert is_blank(None)
    assert is_blank("  ")
    assert is_blank(7)
    assert not is_blank("x")
