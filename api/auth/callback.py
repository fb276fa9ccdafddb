"""Supabase Auth redirect target: exchange the code, sync the user, redirect."""

from http.cookies import SimpleCookie
from typing import Optional

from src.services.auth import exchange_code_for_session, sync_user
from src.utils.config import get_app_url
from src.utils.errors import UnauthorizedError
from src.utils.http import Route, VercelHandler, get_query_param, redirect_response
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

DEFAULT_NEXT = "/dashboard"
SIGNIN_PATH = "/signin"
CODE_VERIFIER_COOKIE = "code_verifier"


def base_url(request: dict) -> str:
    configured = get_app_url()
    if configured:
        return configured.rstrip("/")
    headers = request["headers"]
    scheme = headers.get("x-forwarded-proto", "https")
    host = headers.get("x-forwarded-host") or headers.get("host", "localhost")
    return f"{scheme}://{host}"


def safe_next_path(value: Optional[str]) -> str:
    """Only same-site relative paths are allowed as redirect targets."""
    if not value or not value.startswith("/") or value.startswith("//"):
        return DEFAULT_NEXT
    return value


def read_cookie(request: dict, name: str) -> Optional[str]:
    cookies = SimpleCookie()
    cookies.load(request["headers"].get("cookie", ""))
    morsel = cookies.get(name)
    return morsel.value if morsel else None


async def auth_callback(request, client):
    root = base_url(request)
    code = get_query_param(request, "code")
    if not code:
        return redirect_response(f"{root}{SIGNIN_PATH}")

    try:
        auth_user = await exchange_code_for_session(
            client, code, read_cookie(request, CODE_VERIFIER_COOKIE)
        )
    except UnauthorizedError:
        return redirect_response(f"{root}{SIGNIN_PATH}")

    await sync_user(client, auth_user)
    next_path = safe_next_path(get_query_param(request, "next"))
    logger.info("Auth callback completed", next_path=next_path)
    return redirect_response(f"{root}{next_path}")


class handler(VercelHandler):
    routes = {"GET": Route(auth_callback, "Authentication failed")}
