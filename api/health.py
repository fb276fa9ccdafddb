"""Health check endpoint."""

from src.utils.http import Route, VercelHandler, json_response

SERVICE_NAME = "verbalytics-backend"


async def health(request, client):
    return json_response(200, {"status": "ok", "service": SERVICE_NAME})


class handler(VercelHandler):
    """Health check handler for Vercel serverless function."""

    routes = {
        "GET": Route(health, uses_database=False),
        "POST": Route(health, uses_database=False),
    }
