"""Agent model - a support agent owned by one tenant user."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Agent(BaseModel):
    """Agent record; (user_id, agent_id) is unique per tenant."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Internal agent ID (ULID)")
    user_id: str = Field(..., description="Owning user ID (text FK)")
    agent_id: str = Field(..., description="External agent code, unique per owner")
    agent_name: str = Field(..., description="First name")
    agent_surname: str = Field(..., description="Last name")
    agent_email: str = Field(..., description="Email address")
    agent_phone: Optional[str] = Field(None, description="Phone number")
    agent_slack: Optional[str] = Field(None, description="Slack handle")
    agent_discord: Optional[str] = Field(None, description="Discord handle")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class AgentFields(BaseModel):
    """Mutable agent fields, written as a full replace."""
    agent_name: str
    agent_surname: str
    agent_email: str
    agent_phone: Optional[str] = None
    agent_slack: Optional[str] = None
    agent_discord: Optional[str] = None
