"""Transcript model - one transcribed support call."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Transcript(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    transcript_id: str = Field(..., description="Provider transcript ID")
    agent_id: Optional[str] = Field(None, description="Internal agent ID (text FK)")
    agent_name: Optional[str] = None
    agent_surname: Optional[str] = None
    timestamp: str = Field(..., description="Call time (ISO 8601)")
