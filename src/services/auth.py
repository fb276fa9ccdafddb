"""Authentication and role gating on top of Supabase Auth."""

from typing import Any, Iterable, Optional

from supabase import Client

from src.models.user import DASHBOARD_ROLES, AuthUser, User, UserRole
from src.services.user_repository import UserRepository
from src.utils.errors import ForbiddenError, UnauthorizedError
from src.utils.logging import get_structured_logger, mask_sensitive_data, mask_user_id

logger = get_structured_logger(__name__)


def get_bearer_token(headers: dict[str, str]) -> Optional[str]:
    """Extract the bearer token from an Authorization header, if any."""
    authorization = headers.get("authorization", "")
    if not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


def _to_auth_user(supabase_user: Any) -> AuthUser:
    return AuthUser(
        id=supabase_user.id,
        email=getattr(supabase_user, "email", None),
        user_metadata=getattr(supabase_user, "user_metadata", None) or {},
    )


async def get_auth_user(headers: dict[str, str], client: Client) -> AuthUser:
    """Resolve the Supabase Auth user behind the request's bearer token."""
    token = get_bearer_token(headers)
    if not token:
        raise UnauthorizedError("Unauthorized")

    try:
        response = client.auth.get_user(token)
    except Exception as e:
        logger.warning("Supabase rejected access token", error=mask_sensitive_data(str(e)))
        raise UnauthorizedError("Unauthorized")

    supabase_user = getattr(response, "user", None) if response else None
    if not supabase_user or not getattr(supabase_user, "id", None):
        raise UnauthorizedError("Unauthorized")
    return _to_auth_user(supabase_user)


async def get_user_with_role(headers: dict[str, str], client: Client) -> User:
    """Resolve the request's users row; unknown users are unauthorized."""
    auth_user = await get_auth_user(headers, client)
    user = await UserRepository(client).get_by_supabase_id(auth_user.id)
    if not user:
        logger.info("Authenticated user has no users row", supabase_id=mask_user_id(auth_user.id))
        raise UnauthorizedError("Unauthorized")
    return user


def require_role(user: User, allowed_roles: Iterable[UserRole]) -> User:
    allowed = {role.value for role in allowed_roles}
    if user.role not in allowed:
        logger.info("Role not permitted", user_id=mask_user_id(user.id), role=user.role)
        raise ForbiddenError("Forbidden")
    return user


async def require_dashboard_user(headers: dict[str, str], client: Client) -> User:
    """Authenticated subscriber or admin; the gate shared by dashboard routes."""
    user = await get_user_with_role(headers, client)
    return require_role(user, DASHBOARD_ROLES)


def _display_name(metadata: dict[str, Any]) -> Optional[str]:
    return metadata.get("full_name") or metadata.get("name") or None


def _avatar(metadata: dict[str, Any]) -> Optional[str]:
    return metadata.get("avatar_url") or metadata.get("picture") or None


async def sync_user(client: Client, auth_user: AuthUser) -> User:
    """Create or refresh the users row for a Supabase Auth user.

    New users start with the subscriber role; existing roles are kept.
    """
    users = UserRepository(client)
    metadata = auth_user.user_metadata or {}
    profile = {
        "email": auth_user.email or "",
        "name": _display_name(metadata),
        "image": _avatar(metadata),
    }

    existing = await users.get_by_supabase_id(auth_user.id)
    if existing:
        # Profile fields (company, job title, settings) live in the same
        # metadata column; keep them and overlay the provider's values.
        merged_metadata = {**existing.metadata, **metadata}
        user = await users.update(existing.id, {**profile, "metadata": merged_metadata})
        logger.info("Synced existing user", user_id=mask_user_id(user.id))
        return user

    user = await users.create({
        "supabase_id": auth_user.id,
        **profile,
        "role": UserRole.SUBSCRIBER.value,
        "metadata": metadata,
    })
    logger.info("Created user from Supabase Auth", user_id=mask_user_id(user.id))
    return user


async def get_or_sync_user(headers: dict[str, str], client: Client) -> User:
    """Resolve the users row, creating it on first use."""
    auth_user = await get_auth_user(headers, client)
    user = await UserRepository(client).get_by_supabase_id(auth_user.id)
    if user:
        return user
    return await sync_user(client, auth_user)


async def exchange_code_for_session(
    client: Client,
    code: str,
    code_verifier: Optional[str] = None,
) -> AuthUser:
    """Exchange an OAuth/magic-link code for a session and return its user."""
    params: dict[str, str] = {"auth_code": code}
    if code_verifier:
        params["code_verifier"] = code_verifier
    try:
        response = client.auth.exchange_code_for_session(params)
    except Exception as e:
        logger.warning("Auth code exchange failed", error=mask_sensitive_data(str(e)))
        raise UnauthorizedError("Auth code exchange failed")

    supabase_user = getattr(response, "user", None) if response else None
    if not supabase_user:
        raise UnauthorizedError("Auth code exchange failed")
    return _to_auth_user(supabase_user)
