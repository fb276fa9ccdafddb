"""Account management: profile, settings and system (webhook) tokens."""

import secrets
from typing import Any, Optional

from src.models.user import User, UserSettings
from src.services.user_repository import UserRepository
from src.utils.errors import RequestValidationError
from src.utils.logging import get_structured_logger, mask_user_id
from src.utils.validation import is_blank, is_valid_email

logger = get_structured_logger(__name__)

SYSTEM_TOKEN_BYTES = 32


def profile_view(user: User) -> dict[str, str]:
    """Dashboard profile: company and job title live in metadata."""
    metadata = user.metadata or {}
    return {
        "name": user.name or "",
        "email": user.email,
        "company": metadata.get("company") or "",
        "role": metadata.get("role") or "",
    }


async def update_profile(users: UserRepository, user: User, body: dict[str, Any]) -> User:
    name = body.get("name")
    email = body.get("email")
    if is_blank(name) or is_blank(email):
        raise RequestValidationError("Name and email are required")
    if not is_valid_email(email):
        raise RequestValidationError("Invalid email format")

    metadata = {
        **(user.metadata or {}),
        "company": body.get("company") or "",
        "role": body.get("role") or "",
    }
    updated = await users.update(user.id, {
        "name": name.strip(),
        "email": email.strip(),
        "metadata": metadata,
    })
    logger.info("Profile updated", user_id=mask_user_id(user.id))
    return updated


def get_settings(user: User) -> dict[str, Any]:
    """Stored settings, or the defaults for users who never saved any."""
    stored = (user.metadata or {}).get("settings")
    if isinstance(stored, dict):
        return stored
    return UserSettings().model_dump(by_alias=True)


async def update_settings(users: UserRepository, user: User, settings: Any) -> dict[str, Any]:
    if not settings or not isinstance(settings, dict):
        raise RequestValidationError("Settings are required")
    metadata = {**(user.metadata or {}), "settings": settings}
    await users.update(user.id, {"metadata": metadata})
    return settings


def generate_system_token() -> str:
    return secrets.token_hex(SYSTEM_TOKEN_BYTES)


def system_token_view(user: User) -> dict[str, Any]:
    return {
        "systemToken": user.system_token or None,
        "oldSystemTokens": list(user.old_system_tokens or []),
    }


async def regenerate_system_token(users: UserRepository, user: User) -> User:
    """Issue a new webhook token; the previous one is kept in old_system_tokens."""
    old_tokens = list(user.old_system_tokens or [])
    if user.system_token:
        old_tokens.append(user.system_token)

    updated = await users.update(user.id, {
        "system_token": generate_system_token(),
        "old_system_tokens": old_tokens,
    })
    logger.info(
        "System token regenerated",
        user_id=mask_user_id(user.id),
        retired_tokens=len(old_tokens),
    )
    return updated


def validate_account_request(body: dict[str, Any]) -> str:
    """Check an account deletion/closure request and return its type."""
    request_type: Optional[str] = body.get("requestType")
    if request_type not in ("delete", "close"):
        raise RequestValidationError("Invalid request type")
    if body.get("confirmation") != "delete":
        raise RequestValidationError("Confirmation text must be 'delete'")
    return request_type
