"""Outbound email via AWS SES: contact form and account requests."""

import html
from datetime import datetime
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.models.user import User
from src.utils.config import SesSettings, get_ses_settings
from src.utils.errors import IntegrationError
from src.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)

CHARSET = "UTF-8"


def _ses_client(settings: SesSettings):
    return boto3.client(
        "ses",
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        region_name=settings.region,
    )


def send_email(
    to_address: str,
    subject: str,
    html_body: str,
    text_body: str,
    reply_to: Optional[str] = None,
    settings: Optional[SesSettings] = None,
) -> str:
    """Send one email and return the SES message ID."""
    settings = settings or get_ses_settings()
    message: dict[str, Any] = {
        "Source": settings.from_email,
        "Destination": {"ToAddresses": [to_address]},
        "Message": {
            "Subject": {"Data": subject, "Charset": CHARSET},
            "Body": {
                "Html": {"Data": html_body, "Charset": CHARSET},
                "Text": {"Data": text_body, "Charset": CHARSET},
            },
        },
    }
    if reply_to:
        message["ReplyToAddresses"] = [reply_to]

    try:
        response = _ses_client(settings).send_email(**message)
    except (BotoCoreError, ClientError) as e:
        logger.error("SES send failed", error=mask_sensitive_data(str(e)))
        raise IntegrationError(f"Failed to send email: {e}")

    message_id = response.get("MessageId", "")
    logger.info("Email sent", ses_message_id=message_id)
    return message_id


def render_contact_email(form: dict[str, str]) -> tuple[str, str, str]:
    """Build (subject, html, text) for a contact form submission."""
    name = html.escape(form["name"])
    email = html.escape(form["email"])
    subject = html.escape(form["subject"])
    message = html.escape(form["message"]).replace("\n", "<br>")

    html_body = (
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {name}</p>"
        f"<p><strong>Email:</strong> {email}</p>"
        f"<p><strong>Subject:</strong> {subject}</p>"
        "<h3>Message:</h3>"
        f"<p>{message}</p>"
    )
    text_body = (
        "New Contact Form Submission\n\n"
        f"Name: {form['name']}\n"
        f"Email: {form['email']}\n"
        f"Subject: {form['subject']}\n\n"
        f"Message:\n{form['message']}\n"
    )
    return f"Contact Form: {form['subject']}", html_body, text_body


def send_contact_email(form: dict[str, str]) -> str:
    settings = get_ses_settings()
    subject, html_body, text_body = render_contact_email(form)
    return send_email(
        settings.contact_email,
        subject,
        html_body,
        text_body,
        reply_to=form["email"],
        settings=settings,
    )


def render_account_request_email(user: User, request_type: str) -> tuple[str, str, str]:
    """Build (subject, html, text) for a delete/close account request."""
    label = "Delete All Data" if request_type == "delete" else "Close Account"
    action = "delete all their data" if request_type == "delete" else "close their account"
    company = (user.metadata or {}).get("company") or "Not provided"
    created = user.created_at or "Unknown"
    try:
        created = datetime.fromisoformat(created).strftime("%Y-%m-%d %H:%M UTC")
    except ValueError:
        pass

    details = [
        ("User ID", user.id),
        ("Email", user.email),
        ("Name", user.name or "Not provided"),
        ("Company", company),
        ("Role", user.role),
        ("Account Created", created),
    ]
    items = "".join(
        f"<li><strong>{key}:</strong> {html.escape(str(value))}</li>" for key, value in details
    )
    html_body = (
        f"<h2>Account {label} Request</h2>"
        f"<p>A user has requested to {action}.</p>"
        f"<h3>User Details:</h3><ul>{items}</ul>"
        f"<h3>Request Type:</h3><p><strong>{label}</strong></p>"
        "<p><em>This request was confirmed by the user typing 'delete' in the confirmation field.</em></p>"
        "<p>Please process this request within 5 working days.</p>"
    )
    text_lines = "\n".join(f"- {key}: {value}" for key, value in details)
    text_body = (
        f"Account {label} Request\n\n"
        f"A user has requested to {action}.\n\n"
        f"User Details:\n{text_lines}\n\n"
        f"Request Type: {label}\n\n"
        "This request was confirmed by the user typing 'delete' in the confirmation field.\n\n"
        "Please process this request within 5 working days.\n"
    )
    return f"Account {label} Request - {user.email}", html_body, text_body


def send_account_request_email(user: User, request_type: str) -> str:
    settings = get_ses_settings()
    subject, html_body, text_body = render_account_request_email(user, request_type)
    return send_email(
        settings.admin_email,
        subject,
        html_body,
        text_body,
        reply_to=user.email,
        settings=settings,
    )
