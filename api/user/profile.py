"""Profile endpoint: name, email, company and job title."""

from src.services.accounts import profile_view, update_profile
from src.services.auth import get_or_sync_user
from src.services.user_repository import UserRepository
from src.utils.http import Route, VercelHandler, get_json_body, json_response


async def get_profile(request, client):
    user = await get_or_sync_user(request["headers"], client)
    return json_response(200, profile_view(user))


async def patch_profile(request, client):
    user = await get_or_sync_user(request["headers"], client)
    updated = await update_profile(UserRepository(client), user, get_json_body(request))
    return json_response(200, {**profile_view(updated), "message": "Profile updated successfully"})


class handler(VercelHandler):
    routes = {
        "GET": Route(get_profile, "Failed to fetch profile"),
        "PATCH": Route(patch_profile, "Failed to update profile"),
    }
