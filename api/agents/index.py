"""Agents endpoint: list, create, update and delete the tenant's agents."""

from src.models.agent import AgentFields
from src.services.agent_repository import AgentRepository
from src.services.auth import require_dashboard_user
from src.utils.errors import NotFoundError, RequestValidationError
from src.utils.http import Route, VercelHandler, get_json_body, get_query_param, json_response
from src.utils.validation import clean_optional, is_blank, is_valid_email


def parse_agent_fields(body: dict) -> AgentFields:
    """Validate the editable agent fields from a dashboard form body."""
    if is_blank(body.get("agentName")) or is_blank(body.get("agentSurname")) or is_blank(body.get("agentEmail")):
        raise RequestValidationError("Agent name, surname, and email are required")
    email = body["agentEmail"].strip()
    if not is_valid_email(email):
        raise RequestValidationError("Invalid email format")
    return AgentFields(
        agent_name=body["agentName"].strip(),
        agent_surname=body["agentSurname"].strip(),
        agent_email=email,
        agent_phone=clean_optional(body.get("agentPhone")),
        agent_slack=clean_optional(body.get("agentSlack")),
        agent_discord=clean_optional(body.get("agentDiscord")),
    )


def _require_agent_pk(body: dict) -> str:
    # Dashboard clients send the internal record ID as agentId
    agent_pk = body.get("agentId")
    if not agent_pk:
        raise RequestValidationError("Agent ID is required")
    return agent_pk


async def list_agents(request, client):
    user = await require_dashboard_user(request["headers"], client)
    agents = AgentRepository(client)

    agent_pk = get_query_param(request, "id")
    if agent_pk:
        agent = await agents.get_for_owner(user.id, agent_pk)
        if not agent:
            raise NotFoundError("Agent not found or access denied")
        return json_response(200, {"agent": agent.model_dump(by_alias=True)})

    records = await agents.list_for_owner(user.id)
    return json_response(200, {"agents": [agent.model_dump(by_alias=True) for agent in records]})


async def create_agent(request, client):
    user = await require_dashboard_user(request["headers"], client)
    body = get_json_body(request)

    agent_code = body.get("agentCode")
    if is_blank(agent_code):
        raise RequestValidationError("Agent code is required")
    fields = parse_agent_fields(body)

    agent = await AgentRepository(client).insert(user.id, agent_code.strip(), fields)
    return json_response(200, {
        "message": "Agent created successfully",
        "agent": agent.model_dump(by_alias=True),
    })


async def update_agent(request, client):
    user = await require_dashboard_user(request["headers"], client)
    body = get_json_body(request)
    agent_pk = _require_agent_pk(body)
    fields = parse_agent_fields(body)

    agents = AgentRepository(client)
    if not await agents.get_for_owner(user.id, agent_pk):
        raise NotFoundError("Agent not found or access denied")

    agent = await agents.update(user.id, agent_pk, fields)
    return json_response(200, {
        "message": "Agent updated successfully",
        "agent": agent.model_dump(by_alias=True),
    })


async def delete_agent(request, client):
    user = await require_dashboard_user(request["headers"], client)
    agent_pk = _require_agent_pk(get_json_body(request))

    agents = AgentRepository(client)
    if not await agents.get_for_owner(user.id, agent_pk):
        raise NotFoundError("Agent not found or access denied")

    await agents.delete(user.id, agent_pk)
    return json_response(200, {"message": "Agent deleted successfully"})


class handler(VercelHandler):
    routes = {
        "GET": Route(list_agents, "Failed to fetch agents"),
        "POST": Route(create_agent, "Failed to create agent"),
        "PATCH": Route(update_agent, "Failed to update agent"),
        "DELETE": Route(delete_agent, "Failed to delete agent"),
    }
