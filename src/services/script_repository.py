"""Scripts table operations, scoped to one owning user."""

from typing import Any, Optional

from supabase import Client

from src.models.script import Script
from src.services.supabase_client import all_rows, first_row
from src.utils.errors import RequestValidationError, SupabaseError
from src.utils.ids import generate_id
from src.utils.timestamps import utc_now_iso

SCRIPTS_TABLE = "scripts"


def validate_script_fields(body: dict[str, Any]) -> tuple[str, str]:
    """Return trimmed (name, text) or raise with the matching message."""
    name = body.get("scriptName")
    text = body.get("scriptText")
    if not name or not text:
        raise RequestValidationError("Script name and script text are required")
    if not isinstance(name, str) or not isinstance(text, str):
        raise RequestValidationError("Script name and script text must be strings")
    if not name.strip():
        raise RequestValidationError("Script name cannot be empty")
    if not text.strip():
        raise RequestValidationError("Script text cannot be empty")
    return name.strip(), text.strip()


class ScriptRepository:
    def __init__(self, client: Client):
        self.client = client

    def _table(self):
        return self.client.table(SCRIPTS_TABLE)

    async def list_for_owner(self, owner_id: str) -> list[Script]:
        try:
            result = (
                self._table()
                .select("*")
                .eq("user_id", owner_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to list scripts: {e}")
        return [Script(**row) for row in all_rows(result)]

    async def get_for_owner(self, owner_id: str, script_id: str) -> Optional[Script]:
        try:
            result = (
                self._table()
                .select("*")
                .eq("id", script_id)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to get script: {e}")
        row = first_row(result)
        return Script(**row) if row else None

    async def create(self, owner_id: str, name: str, text: str) -> Script:
        now = utc_now_iso()
        record = {
            "id": generate_id(),
            "user_id": owner_id,
            "script_name": name,
            "script_text": text,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = self._table().insert(record).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to create script: {e}")
        row = first_row(result)
        if not row:
            raise SupabaseError("Failed to create script: no data returned")
        return Script(**row)

    async def update(self, owner_id: str, script_id: str, name: str, text: str) -> Script:
        try:
            result = (
                self._table()
                .update({"script_name": name, "script_text": text, "updated_at": utc_now_iso()})
                .eq("id", script_id)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to update script: {e}")
        row = first_row(result)
        if not row:
            raise SupabaseError(f"Failed to update script: {script_id}")
        return Script(**row)

    async def delete(self, owner_id: str, script_id: str) -> None:
        try:
            self._table().delete().eq("id", script_id).eq("user_id", owner_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to delete script: {e}")
