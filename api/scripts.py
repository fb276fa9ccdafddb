"""Call scripts endpoint."""

from src.services.auth import require_dashboard_user
from src.services.script_repository import ScriptRepository, validate_script_fields
from src.utils.errors import NotFoundError, RequestValidationError
from src.utils.http import Route, VercelHandler, get_json_body, json_response


def _require_script_id(body: dict) -> str:
    script_id = body.get("scriptId")
    if not script_id:
        raise RequestValidationError("Script ID is required")
    return script_id


async def list_scripts(request, client):
    user = await require_dashboard_user(request["headers"], client)
    scripts = await ScriptRepository(client).list_for_owner(user.id)
    return json_response(200, {"scripts": [script.model_dump(by_alias=True) for script in scripts]})


async def create_script(request, client):
    user = await require_dashboard_user(request["headers"], client)
    name, text = validate_script_fields(get_json_body(request))
    script = await ScriptRepository(client).create(user.id, name, text)
    return json_response(200, {
        "message": "Script created successfully",
        "script": script.model_dump(by_alias=True),
    })


async def update_script(request, client):
    user = await require_dashboard_user(request["headers"], client)
    body = get_json_body(request)
    script_id = _require_script_id(body)
    name, text = validate_script_fields(body)

    scripts = ScriptRepository(client)
    if not await scripts.get_for_owner(user.id, script_id):
        raise NotFoundError("Script not found or access denied")

    script = await scripts.update(user.id, script_id, name, text)
    return json_response(200, {
        "message": "Script updated successfully",
        "script": script.model_dump(by_alias=True),
    })


async def delete_script(request, client):
    user = await require_dashboard_user(request["headers"], client)
    script_id = _require_script_id(get_json_body(request))

    scripts = ScriptRepository(client)
    if not await scripts.get_for_owner(user.id, script_id):
        raise NotFoundError("Script not found or access denied")

    await scripts.delete(user.id, script_id)
    return json_response(200, {"message": "Script deleted successfully"})


class handler(VercelHandler):
    routes = {
        "GET": Route(list_scripts, "Failed to fetch scripts"),
        "POST": Route(create_script, "Failed to create script"),
        "PATCH": Route(update_script, "Failed to update script"),
        "DELETE": Route(delete_script, "Failed to delete script"),
    }
