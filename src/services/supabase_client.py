"""Supabase client wrapper with async context manager support."""

import logging
from typing import Any, Optional
from supabase import create_client, Client
from supabase.client import ClientOptions

from src.utils.config import get_supabase_settings
from src.utils.errors import SupabaseError

logger = logging.getLogger(__name__)


def create_supabase_client() -> Client:
    """Create a Supabase client using the service role key.

    One client is created per request and handed to the repositories; there
    is no shared module-level instance.
    """
    settings = get_supabase_settings()

    # Server-side only: no session persistence or token refresh
    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
    )

    client = create_client(settings.url, settings.service_role_key, options)
    logger.debug("Supabase client initialized", extra={"url": settings.url})
    return client


class SupabaseClient:
    """Async context manager scoping a Supabase client to one request."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = create_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        # supabase-py has no explicit close; drop the reference
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        self.client = None
        return False


def first_row(result: Any) -> Optional[dict]:
    """Return the first row of a query result, or None."""
    data = getattr(result, "data", None)
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None


def all_rows(result: Any) -> list[dict]:
    data = getattr(result, "data", None)
    return data if isinstance(data, list) else []


def is_unique_violation(error: Exception) -> bool:
    """Check whether a Postgres error is a unique constraint violation."""
    text = str(error).lower()
    return "duplicate key" in text or "23505" in text


async def check_connection(client: Client) -> None:
    """Run a trivial query to confirm the database is reachable."""
    try:
        client.table("users").select("id").limit(1).execute()
    except Exception as e:
        raise SupabaseError(f"Database connection failed: {e}")
