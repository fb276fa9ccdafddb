"""Webhook (system) token issuance."""

from src.services.accounts import regenerate_system_token, system_token_view
from src.services.auth import get_user_with_role
from src.services.user_repository import UserRepository
from src.utils.http import Route, VercelHandler, json_response


async def read_system_token(request, client):
    user = await get_user_with_role(request["headers"], client)
    return json_response(200, system_token_view(user))


async def regenerate(request, client):
    user = await get_user_with_role(request["headers"], client)
    users = UserRepository(client)
    # Re-read so the retired token list reflects the stored row
    current = await users.get_by_id(user.id)
    updated = await regenerate_system_token(users, current)
    return json_response(200, {
        "message": "System token regenerated successfully",
        **system_token_view(updated),
    })


class handler(VercelHandler):
    routes = {
        "GET": Route(read_system_token, "Failed to fetch system token"),
        "POST": Route(regenerate, "Failed to regenerate system token"),
    }
