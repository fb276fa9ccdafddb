"""Test helper functions."""

import json
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

from src.models.agent import Agent, AgentFields
from src.utils.ids import generate_id
from src.utils.timestamps import utc_now_iso

MULTIPART_BOUNDARY = "----verbalyticsTestBoundary"


def create_vercel_request(
    method: str = "POST",
    path: str = "/api/agents",
    body: Any = None,
    headers: Dict[str, str] = None,
    query: Dict[str, str] = None,
) -> Dict[str, Any]:
    """Create a Vercel request object for testing."""
    if headers is None:
        headers = {
            "content-type": "application/json",
            "authorization": "Bearer test-access-token",
        }

    return {
        "method": method,
        "path": path,
        "headers": headers,
        "body": json.dumps(body) if isinstance(body, (dict, list)) else (body or ""),
        "query": query or {},
    }


def build_multipart_body(
    field_name: str,
    filename: str,
    content: bytes,
    content_type: str = "text/csv",
) -> tuple[bytes, str]:
    """Encode one file part as multipart/form-data; returns (body, content-type header)."""
    body = (
        f"--{MULTIPART_BOUNDARY}\r\n"
        f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
        f"Content-Type: {content_type}\r\n\r\n"
    ).encode("utf-8") + content + f"\r\n--{MULTIPART_BOUNDARY}--\r\n".encode("utf-8")
    return body, f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"


def create_upload_request(
    content: bytes,
    filename: str = "agents.csv",
    content_type: str = "text/csv",
    field_name: str = "file",
) -> Dict[str, Any]:
    body, header = build_multipart_body(field_name, filename, content, content_type)
    return {
        "method": "POST",
        "path": "/api/agents/upload",
        "headers": {"content-type": header, "authorization": "Bearer test-access-token"},
        "body": body,
        "query": {},
    }


def csv_text(*lines: str) -> str:
    return "\n".join(lines) + "\n"


def mock_query_result(data: Optional[list] = None) -> MagicMock:
    """Mimic a postgrest APIResponse."""
    return MagicMock(data=data if data is not None else [])


def create_query_chain(result: Any = None) -> MagicMock:
    """A query builder where every filter returns itself and execute() returns result."""
    query = MagicMock()
    for method in ("select", "eq", "order", "gte", "lte", "ilike", "limit", "insert", "update", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = result if result is not None else mock_query_result()
    return query


class InMemoryAgentStore:
    """Agent store keyed by (owner, code), with optional injected failures."""

    def __init__(self, fail_codes: Optional[set] = None):
        self.agents: Dict[tuple, Agent] = {}
        self.fail_codes = fail_codes or set()
        self.inserts = 0
        self.updates = 0

    async def find_by_code(self, owner_id: str, agent_code: str) -> Optional[Agent]:
        return self.agents.get((owner_id, agent_code))

    async def insert(self, owner_id: str, agent_code: str, fields: AgentFields) -> Agent:
        if agent_code in self.fail_codes:
            raise RuntimeError("connection reset")
        now = utc_now_iso()
        agent = Agent(
            id=generate_id(),
            user_id=owner_id,
            agent_id=agent_code,
            created_at=now,
            updated_at=now,
            **fields.model_dump(),
        )
        self.agents[(owner_id, agent_code)] = agent
        self.inserts += 1
        return agent

    async def update(self, owner_id: str, agent_pk: str, fields: AgentFields) -> Agent:
        for key, agent in self.agents.items():
            if agent.id == agent_pk and agent.user_id == owner_id:
                if agent.agent_id in self.fail_codes:
                    raise RuntimeError("connection reset")
                updated = agent.model_copy(update={**fields.model_dump(), "updated_at": utc_now_iso()})
                self.agents[key] = updated
                self.updates += 1
                return updated
        raise LookupError(agent_pk)

    def count(self, owner_id: Optional[str] = None) -> int:
        if owner_id is None:
            return len(self.agents)
        return sum(1 for owner, _ in self.agents if owner == owner_id)
