"""CSV agent import models (ephemeral, never persisted as such)."""

from typing import Any, Optional
from pydantic import BaseModel, Field

from src.models.agent import Agent, AgentFields


class ImportRow(BaseModel):
    """One validated CSV data row, keyed by canonical column name."""
    line_number: int = Field(..., description="1-based line number (header is line 1)")
    code: str
    first: str
    last: str
    email: str
    phone: Optional[str] = None
    slack: Optional[str] = None
    discord: Optional[str] = None

    def to_agent_fields(self) -> AgentFields:
        return AgentFields(
            agent_name=self.first,
            agent_surname=self.last,
            agent_email=self.email,
            agent_phone=self.phone,
            agent_slack=self.slack,
            agent_discord=self.discord,
        )


class ImportOutcome(BaseModel):
    """Aggregated result of one upload."""
    processed: int = 0
    errors: list[str] = Field(default_factory=list)
    data: list[Agent] = Field(default_factory=list)

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "message": f"Successfully processed {self.processed} agent(s)",
            "processed": self.processed,
            "data": [agent.model_dump(by_alias=True) for agent in self.data],
        }
        if self.errors:
            body["errors"] = list(self.errors)
        return body
