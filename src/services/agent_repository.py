"""Agents table operations, scoped to one owning user."""

import logging
from typing import Optional, Protocol

from supabase import Client

from src.models.agent import Agent, AgentFields
from src.services.supabase_client import all_rows, first_row, is_unique_violation
from src.utils.errors import ConflictError, SupabaseError
from src.utils.ids import generate_id
from src.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

AGENTS_TABLE = "agents"


class AgentStore(Protocol):
    """Persistence operations the CSV import needs."""

    async def find_by_code(self, owner_id: str, agent_code: str) -> Optional[Agent]: ...

    async def insert(self, owner_id: str, agent_code: str, fields: AgentFields) -> Agent: ...

    async def update(self, owner_id: str, agent_pk: str, fields: AgentFields) -> Agent: ...


class AgentRepository:
    """Supabase-backed agent store."""

    def __init__(self, client: Client):
        self.client = client

    def _table(self):
        return self.client.table(AGENTS_TABLE)

    async def list_for_owner(self, owner_id: str) -> list[Agent]:
        """Get all agents for an owner, newest first."""
        try:
            result = (
                self._table()
                .select("*")
                .eq("user_id", owner_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to list agents: {e}")
        return [Agent(**row) for row in all_rows(result)]

    async def get_for_owner(self, owner_id: str, agent_pk: str) -> Optional[Agent]:
        """Get an agent by internal ID, only if the owner matches."""
        try:
            result = (
                self._table()
                .select("*")
                .eq("id", agent_pk)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to get agent: {e}")
        row = first_row(result)
        return Agent(**row) if row else None

    async def find_by_code(self, owner_id: str, agent_code: str) -> Optional[Agent]:
        """Look up an agent by the (owner, external code) key."""
        try:
            result = (
                self._table()
                .select("*")
                .eq("user_id", owner_id)
                .eq("agent_id", agent_code)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to look up agent {agent_code}: {e}")
        row = first_row(result)
        return Agent(**row) if row else None

    async def insert(self, owner_id: str, agent_code: str, fields: AgentFields) -> Agent:
        """Create a new agent owned by owner_id."""
        now = utc_now_iso()
        record = {
            "id": generate_id(),
            "user_id": owner_id,
            "agent_id": agent_code,
            **fields.model_dump(),
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = self._table().insert(record).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise ConflictError(f"Agent ID {agent_code} already exists")
            raise SupabaseError(f"Failed to create agent: {e}")

        row = first_row(result)
        if not row:
            raise SupabaseError("Failed to create agent: no data returned")
        logger.info("Created agent", extra={"agent_pk": row.get("id")})
        return Agent(**row)

    async def update(self, owner_id: str, agent_pk: str, fields: AgentFields) -> Agent:
        """Replace the mutable fields of an agent; optional blanks are stored as null."""
        updates = {**fields.model_dump(), "updated_at": utc_now_iso()}
        try:
            result = (
                self._table()
                .update(updates)
                .eq("id", agent_pk)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to update agent: {e}")

        row = first_row(result)
        if not row:
            raise SupabaseError(f"Failed to update agent: {agent_pk}")
        return Agent(**row)

    async def delete(self, owner_id: str, agent_pk: str) -> None:
        try:
            self._table().delete().eq("id", agent_pk).eq("user_id", owner_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to delete agent: {e}")
