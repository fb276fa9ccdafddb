"""Role of the signed-in user, used by the dashboard to gate pages."""

from src.services.auth import get_user_with_role
from src.utils.http import Route, VercelHandler, json_response


async def user_role(request, client):
    user = await get_user_with_role(request["headers"], client)
    return json_response(200, {"role": user.role})


class handler(VercelHandler):
    routes = {"GET": Route(user_role, "Failed to fetch user role")}
