"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")

from src.models.user import User
from tests.utils.factories import create_user_data
from tests.utils.helpers import InMemoryAgentStore, csv_text


@pytest.fixture
def sample_user():
    """Subscriber users row."""
    return User(**create_user_data(
        id="01JEXAMPLEUSER0000000000AB",
        supabase_id="5f8d2c1e-7a3b-4c9d-8e6f-1a2b3c4d5e6f",
        email="owner@example.com",
        name="Olive Owner",
    ))


@pytest.fixture
def agent_store():
    """In-memory agent store keyed by (owner, code)."""
    return InMemoryAgentStore()


@pytest.fixture
def minimal_csv():
    return csv_text("code,first,last,email", "A1,Jane,Doe,jane@x.com")


@pytest.fixture
def full_csv():
    """Template-style file with every column, a placeholder row and two agents."""
    return csv_text(
        "AgentID,AgentName,AgentSurname,AgentEmail,AgentPhone,AgentSlack,AgentDiscord",
        "required,required,required,required,required,required,required",
        'A1,Jane,Doe,jane@x.com,+44 20 7946 0000,@jane,jane#0001',
        'A2,"Smith, ""Jr.""",Brown,sam@x.com,,,',
    )


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time

