"""Public contact form: reCAPTCHA-checked, delivered by email."""

from src.services.email_sender import send_contact_email
from src.services.recaptcha import verify_recaptcha
from src.utils.errors import RequestValidationError
from src.utils.http import Route, VercelHandler, get_json_body, json_response
from src.utils.validation import is_blank, is_valid_email

CONTACT_FIELDS = ("name", "email", "subject", "message", "recaptchaToken")


def validate_contact_form(body: dict) -> dict[str, str]:
    if any(is_blank(body.get(field)) for field in CONTACT_FIELDS):
        raise RequestValidationError("All fields are required")
    if not is_valid_email(body["email"]):
        raise RequestValidationError("Invalid email format")
    return {field: body[field].strip() for field in CONTACT_FIELDS}


async def submit_contact(request, client):
    form = validate_contact_form(get_json_body(request))
    if not verify_recaptcha(form["recaptchaToken"]):
        raise RequestValidationError("reCAPTCHA verification failed")

    send_contact_email(form)
    return json_response(200, {"message": "Message sent successfully"})


class handler(VercelHandler):
    routes = {
        "POST": Route(
            submit_contact,
            "Failed to send message. Please try again later.",
            uses_database=False,
        ),
    }
