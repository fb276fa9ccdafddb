"""Script model - call scripts agents are scored against."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Script(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Script ID (ULID)")
    user_id: str = Field(..., description="Owning user ID (text FK)")
    script_name: str
    script_text: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
