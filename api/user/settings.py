"""Dashboard preferences endpoint."""

from src.services.accounts import get_settings, update_settings
from src.services.auth import get_user_with_role
from src.services.user_repository import UserRepository
from src.utils.http import Route, VercelHandler, get_json_body, json_response


async def read_settings(request, client):
    user = await get_user_with_role(request["headers"], client)
    return json_response(200, get_settings(user))


async def patch_settings(request, client):
    user = await get_user_with_role(request["headers"], client)
    body = get_json_body(request)
    settings = await update_settings(UserRepository(client), user, body.get("settings"))
    return json_response(200, {"message": "Settings updated successfully", "settings": settings})


class handler(VercelHandler):
    routes = {
        "GET": Route(read_settings, "Failed to fetch settings"),
        "PATCH": Route(patch_settings, "Failed to update settings"),
    }
