"""Account deletion/closure requests, forwarded to the administrator by email."""

from src.services.accounts import validate_account_request
from src.services.auth import get_user_with_role
from src.services.email_sender import send_account_request_email
from src.utils.http import Route, VercelHandler, get_json_body, json_response
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)


async def submit_account_request(request, client):
    user = await get_user_with_role(request["headers"], client)
    request_type = validate_account_request(get_json_body(request))

    send_account_request_email(user, request_type)
    logger.info("Account request submitted", user_id=mask_user_id(user.id), request_type=request_type)
    return json_response(200, {"message": "Request submitted successfully", "requestType": request_type})


class handler(VercelHandler):
    routes = {"POST": Route(submit_account_request, "Failed to submit request")}
