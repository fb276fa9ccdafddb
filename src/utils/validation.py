"""Shared input validation helpers."""

import re
from typing import Any, Optional

_DOMAIN_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    rf"@{_DOMAIN_LABEL}(?:\.{_DOMAIN_LABEL})+$"
)


def is_valid_email(value: Optional[str]) -> bool:
    """Check an e-mail address: local part, '@', two or more dot-separated labels."""
    if not value:
        return False
    return EMAIL_PATTERN.match(value.strip()) is not None


def clean_optional(value: Any) -> Optional[str]:
    """Trim a string; blank or non-string values become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()
