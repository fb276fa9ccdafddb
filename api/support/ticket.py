"""Support tickets, filed as Jira issues."""

from src.services.auth import require_dashboard_user
from src.services.jira_client import create_jira_issue, validate_ticket
from src.utils.http import Route, VercelHandler, get_json_body, json_response


async def create_ticket(request, client):
    user = await require_dashboard_user(request["headers"], client)
    ticket = validate_ticket(get_json_body(request))
    issue = create_jira_issue(ticket, user)
    return json_response(200, {
        "message": "Support ticket created successfully",
        "ticketId": issue["key"],
        "jiraIssueId": issue["id"],
    })


class handler(VercelHandler):
    routes = {
        "POST": Route(create_ticket, "Failed to create support ticket. Please try again later."),
    }
