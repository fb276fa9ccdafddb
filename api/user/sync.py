"""Sync the Supabase Auth user into the users table."""

from src.services.auth import get_auth_user, sync_user
from src.utils.http import Route, VercelHandler, json_response


async def sync(request, client):
    auth_user = await get_auth_user(request["headers"], client)
    user = await sync_user(client, auth_user)
    return json_response(200, {
        "message": "User synced successfully",
        "user": {"id": user.id, "email": user.email, "name": user.name, "role": user.role},
    })


class handler(VercelHandler):
    routes = {"POST": Route(sync, "Failed to sync user")}
