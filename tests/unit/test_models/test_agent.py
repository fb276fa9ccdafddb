"""Tests for Agent and import models."""

import pytest
from pydantic import ValidationError
from src.models.agent import Agent, AgentFields
from src.models.agent_import import ImportOutcome, ImportRow
from tests.utils.assertions import assert_valid_agent
from tests.utils.factories import create_agent_data


@pytest.mark.unit
def test_agent_serializes_camel_case():
    agent = Agent(**create_agent_data(agent_code="A1"))

    data = agent.model_dump(by_alias=True)

    assert_valid_agent(data)
    assert data["agentId"] == "A1"
    assert data["agentPhone"] is None


@pytest.mark.unit
def test_agent_accepts_aliases():
    agent = Agent(
        id="01ARZ3NDEKTSV4RRFFQ69G5FAV",
        userId="01JEXAMPLEUSER0000000000AB",
        agentId="A1",
        agentName="Jane",
        agentSurname="Doe",
        agentEmail="jane@x.com",
    )

    assert agent.agent_id == "A1"
    assert agent.user_id == "01JEXAMPLEUSER0000000000AB"


@pytest.mark.unit
def test_agent_missing_required_fields():
    with pytest.raises(ValidationError):
        Agent(id="01ARZ3NDEKTSV4RRFFQ69G5FAV", user_id="u", agent_id="A1")


@pytest.mark.unit
def test_import_row_to_agent_fields():
    row = ImportRow(line_number=2, code="A1", first="Jane", last="Doe", email="jane@x.com", slack="@jane")

    assert row.to_agent_fields() == AgentFields(
        agent_name="Jane",
        agent_surname="Doe",
        agent_email="jane@x.com",
        agent_slack="@jane",
    )


@pytest.mark.unit
def test_import_outcome_response():
    agent = Agent(**create_agent_data(agent_code="A1"))
    outcome = ImportOutcome(processed=1, data=[agent])

    body = outcome.to_response()

    assert body["message"] == "Successfully processed 1 agent(s)"
    assert body["processed"] == 1
    assert body["data"][0]["agentId"] == "A1"
    assert "errors" not in body
