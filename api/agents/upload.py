"""CSV bulk import of agents."""

from src.services.agent_import import import_agents_csv
from src.services.agent_repository import AgentRepository
from src.services.auth import require_dashboard_user
from src.utils.errors import RequestValidationError
from src.utils.http import Route, UploadedFile, VercelHandler, get_uploaded_file, json_response
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)

CSV_CONTENT_TYPES = ("text/csv", "application/csv")


def is_csv_file(upload: UploadedFile) -> bool:
    return upload.filename.lower().endswith(".csv") or upload.content_type in CSV_CONTENT_TYPES


async def upload_agents(request, client):
    user = await require_dashboard_user(request["headers"], client)

    upload = get_uploaded_file(request, "file")
    if upload is None:
        raise RequestValidationError("No file provided")
    if not is_csv_file(upload):
        raise RequestValidationError("Invalid file type. Please upload a CSV file.")

    try:
        text = upload.text()
    except UnicodeDecodeError:
        raise RequestValidationError("CSV file must be UTF-8 encoded")

    logger.info(
        "Agent CSV received",
        user_id=mask_user_id(user.id),
        filename=upload.filename,
        size_bytes=len(upload.content),
    )
    outcome = await import_agents_csv(text, user.id, AgentRepository(client))
    return json_response(200, outcome.to_response())


class handler(VercelHandler):
    routes = {"POST": Route(upload_agents, "Failed to process CSV file")}
