"""Database connectivity check used by the admin status page."""

from src.services.supabase_client import check_connection
from src.utils.errors import SupabaseError
from src.utils.http import Route, VercelHandler, json_response
from src.utils.timestamps import utc_now_iso


async def database_health(request, client):
    try:
        await check_connection(client)
    except SupabaseError as e:
        return json_response(500, {
            "status": "error",
            "message": "Database connection failed",
            "error": e.message,
            "timestamp": utc_now_iso(),
        })

    return json_response(200, {
        "status": "success",
        "message": "Database connection successful",
        "timestamp": utc_now_iso(),
    })


class handler(VercelHandler):
    routes = {"GET": Route(database_health, "Database connection failed")}
