"""Support tickets as Jira Cloud issues."""

from typing import Any, Optional

import requests

from src.models.user import User
from src.utils.config import JiraSettings, get_jira_settings
from src.utils.errors import IntegrationError, RequestValidationError
from src.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)

REQUEST_TIMEOUT_SECONDS = 15

PRIORITY_MAP = {
    "low": "Lowest",
    "medium": "Medium",
    "high": "High",
    "urgent": "Highest",
}

CATEGORY_ISSUE_TYPES = {
    "general": "Task",
    "technical": "Bug",
    "billing": "Task",
    "feature": "Story",
    "bug": "Bug",
    "account": "Task",
}


def validate_ticket(body: dict[str, Any]) -> dict[str, str]:
    if not body.get("subject") or not body.get("description"):
        raise RequestValidationError("Subject and description are required")
    priority = body.get("priority")
    category = body.get("category")
    if not isinstance(priority, str) or priority not in PRIORITY_MAP:
        raise RequestValidationError("Invalid priority value")
    if not isinstance(category, str) or category not in CATEGORY_ISSUE_TYPES:
        raise RequestValidationError("Invalid category value")
    return {
        "subject": str(body["subject"]),
        "description": str(body["description"]),
        "priority": priority,
        "category": category,
    }


def build_issue_payload(ticket: dict[str, str], user: User, project_key: str) -> dict[str, Any]:
    """Jira REST v3 issue body; the description uses Atlassian document format."""
    description = (
        "User Information:\n"
        f"Email: {user.email}\n"
        f"Name: {user.name or 'Not provided'}\n\n"
        "Issue Details:\n"
        f"{ticket['description']}\n\n"
        f"Category: {ticket['category']}\n"
        f"Priority: {ticket['priority']}"
    )
    return {
        "fields": {
            "project": {"key": project_key},
            "summary": ticket["subject"],
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {"type": "paragraph", "content": [{"type": "text", "text": description}]}
                ],
            },
            "issuetype": {"name": CATEGORY_ISSUE_TYPES.get(ticket["category"], "Task")},
            "priority": {"name": PRIORITY_MAP.get(ticket["priority"], "Medium")},
            "labels": ["support-ticket", "web-portal", ticket["category"]],
        }
    }


def create_jira_issue(ticket: dict[str, str], user: User, settings: Optional[JiraSettings] = None) -> dict[str, str]:
    """Create the issue and return its key and ID."""
    settings = settings or get_jira_settings()
    payload = build_issue_payload(ticket, user, settings.project_key)

    try:
        response = requests.post(
            f"{settings.base_url}/rest/api/3/issue",
            json=payload,
            auth=(settings.email, settings.api_token),
            headers={"Accept": "application/json"},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error("Jira request failed", error=mask_sensitive_data(str(e)))
        raise IntegrationError(f"Failed to create JIRA issue: {e}")

    if not response.ok:
        logger.error("Jira API error", status_code=response.status_code, body=mask_sensitive_data(response.text[:500]))
        raise IntegrationError(
            f"Failed to create JIRA issue: {response.status_code} {response.reason}"
        )

    result = response.json()
    logger.info("Jira issue created", issue_key=result.get("key"))
    return {"key": result.get("key"), "id": result.get("id")}
