"""Tests for the agents CRUD endpoint."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))
from api.agents.index import create_agent, delete_agent, list_agents, parse_agent_fields, update_agent
from src.models.agent import Agent
from src.utils.errors import ForbiddenError, RequestValidationError
from src.utils.http import Route, dispatch
from tests.utils.assertions import assert_error_response, assert_valid_agent, assert_valid_response, response_json
from tests.utils.factories import create_agent_data
from tests.utils.helpers import create_vercel_request

AGENT_BODY = {
    "agentName": "Jane",
    "agentSurname": "Doe",
    "agentEmail": "jane@x.com",
    "agentSlack": "  ",
}


@pytest.fixture
def dashboard_user(sample_user):
    with patch('api.agents.index.require_dashboard_user', new=AsyncMock(return_value=sample_user)):
        yield sample_user


@pytest.fixture
def repository():
    with patch('api.agents.index.AgentRepository') as mock_repo_class:
        yield mock_repo_class.return_value


@pytest.mark.unit
def test_parse_agent_fields_blank_optional_becomes_none():
    fields = parse_agent_fields(AGENT_BODY)

    assert fields.agent_name == "Jane"
    assert fields.agent_slack is None


@pytest.mark.unit
@pytest.mark.parametrize("override,message", [
    ({"agentSurname": ""}, "Agent name, surname, and email are required"),
    ({"agentEmail": "jane"}, "Invalid email format"),
])
def test_parse_agent_fields_rejects(override, message):
    with pytest.raises(RequestValidationError) as exc_info:
        parse_agent_fields({**AGENT_BODY, **override})

    assert exc_info.value.message == message


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_agents(dashboard_user, repository):
    rows = [create_agent_data(user_id=dashboard_user.id)]
    repository.list_for_owner = AsyncMock(return_value=[Agent(**row) for row in rows])

    response = await list_agents(create_vercel_request(method="GET"), MagicMock())

    assert_valid_response(response, 200)
    agents = response_json(response)["agents"]
    assert len(agents) == 1
    assert_valid_agent(agents[0])
    repository.list_for_owner.assert_awaited_once_with(dashboard_user.id)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_single_agent_of_other_owner(dashboard_user, repository):
    repository.get_for_owner = AsyncMock(return_value=None)
    request = create_vercel_request(method="GET", query={"id": "01ARZ3NDEKTSV4RRFFQ69G5FAV"})

    response = await dispatch(Route(list_agents, uses_database=False), request)

    assert_error_response(response, 404, "Agent not found or access denied")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_agent(dashboard_user, repository):
    agent = Agent(**create_agent_data(user_id=dashboard_user.id, agent_code="A1"))
    repository.insert = AsyncMock(return_value=agent)

    response = await create_agent(
        create_vercel_request(body={**AGENT_BODY, "agentCode": " A1 "}), MagicMock()
    )

    assert_valid_response(response, 200)
    assert response_json(response)["message"] == "Agent created successfully"
    owner_id, agent_code, fields = repository.insert.call_args[0]
    assert owner_id == dashboard_user.id
    assert agent_code == "A1"
    assert fields.agent_email == "jane@x.com"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_agent_requires_code(dashboard_user, repository):
    response = await dispatch(
        Route(create_agent, uses_database=False),
        create_vercel_request(body=AGENT_BODY),
    )

    assert_error_response(response, 400, "Agent code is required")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_agent(dashboard_user, repository):
    agent = Agent(**create_agent_data(user_id=dashboard_user.id))
    repository.get_for_owner = AsyncMock(return_value=agent)
    repository.update = AsyncMock(return_value=agent)

    response = await update_agent(
        create_vercel_request(method="PATCH", body={**AGENT_BODY, "agentId": agent.id}), MagicMock()
    )

    assert_valid_response(response, 200)
    repository.update.assert_awaited_once()
    assert repository.update.call_args[0][1] == agent.id


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_agent_not_owned(dashboard_user, repository):
    repository.get_for_owner = AsyncMock(return_value=None)
    repository.delete = AsyncMock()

    response = await dispatch(
        Route(delete_agent, uses_database=False),
        create_vercel_request(method="DELETE", body={"agentId": "01ARZ3NDEKTSV4RRFFQ69G5FAV"}),
    )

    assert_error_response(response, 404, "Agent not found or access denied")
    repository.delete.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_agents_forbidden_role():
    with patch('api.agents.index.require_dashboard_user', new=AsyncMock(side_effect=ForbiddenError("Forbidden"))):
        response = await dispatch(Route(list_agents, uses_database=False), create_vercel_request(method="GET"))

    assert_error_response(response, 403, "Forbidden")
