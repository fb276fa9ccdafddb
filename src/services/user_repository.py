"""Users table operations."""

import logging
from typing import Any, Optional

from supabase import Client

from src.models.user import User
from src.services.supabase_client import first_row, is_unique_violation
from src.utils.errors import ConflictError, NotFoundError, SupabaseError
from src.utils.ids import generate_id
from src.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class UserRepository:
    """Supabase-backed user store."""

    def __init__(self, client: Client):
        self.client = client

    def _table(self):
        return self.client.table(USERS_TABLE)

    async def get_by_supabase_id(self, supabase_id: str) -> Optional[User]:
        try:
            result = self._table().select("*").eq("supabase_id", supabase_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to get user by supabase_id: {e}")
        row = first_row(result)
        return User(**row) if row else None

    async def get_by_id(self, user_id: str) -> User:
        """Get a user by ID; raises NotFoundError when absent."""
        try:
            result = self._table().select("*").eq("id", user_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to get user: {e}")
        row = first_row(result)
        if not row:
            raise NotFoundError("User not found")
        return User(**row)

    async def create(self, user_data: dict[str, Any]) -> User:
        now = utc_now_iso()
        record = {"id": generate_id(), "created_at": now, "updated_at": now, **user_data}
        try:
            result = self._table().insert(record).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise ConflictError("Email already in use")
            raise SupabaseError(f"Failed to create user: {e}")
        row = first_row(result)
        if not row:
            raise SupabaseError("Failed to create user: no data returned")
        return User(**row)

    async def update(self, user_id: str, updates: dict[str, Any]) -> User:
        """Update a user record; a duplicate email raises ConflictError."""
        updates = {**updates, "updated_at": utc_now_iso()}
        try:
            result = self._table().update(updates).eq("id", user_id).execute()
        except Exception as e:
            if is_unique_violation(e) and "email" in str(e).lower():
                raise ConflictError("Email already in use")
            raise SupabaseError(f"Failed to update user: {e}")
        row = first_row(result)
        if not row:
            raise NotFoundError("User not found")
        return User(**row)
