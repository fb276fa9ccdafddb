"""Identifier generation."""

from ulid import ULID


def generate_id() -> str:
    """Generate a text-based record ID (ULID format, 26 chars)."""
    return str(ULID())
