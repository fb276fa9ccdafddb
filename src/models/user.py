"""User models - tenant accounts backed by Supabase Auth."""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    SUBSCRIBER = "subscriber"
    ADMIN = "admin"


DASHBOARD_ROLES = (UserRole.SUBSCRIBER, UserRole.ADMIN)


class AuthUser(BaseModel):
    """Identity returned by Supabase Auth."""
    id: str
    email: Optional[str] = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class User(BaseModel):
    """Row of the users table."""
    id: str = Field(..., description="User ID (ULID)")
    supabase_id: str = Field(..., description="Supabase Auth user ID")
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    role: str = Field(default=UserRole.SUBSCRIBER.value, description="Role: subscriber, admin")
    metadata: dict[str, Any] = Field(default_factory=dict)
    system_token: Optional[str] = None
    old_system_tokens: list[str] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UserSettings(BaseModel):
    """Dashboard preferences kept under metadata.settings."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    email_notifications: bool = True
    push_notifications: bool = False
    marketing_emails: bool = False
    weekly_reports: bool = True
    auto_save: bool = True
    dark_mode: bool = False
