"""Transcripts listing with date range and transcript ID filters."""

from src.services.auth import require_dashboard_user
from src.services.transcript_repository import TranscriptRepository
from src.utils.http import Route, VercelHandler, get_query_param, json_response


async def list_transcripts(request, client):
    user = await require_dashboard_user(request["headers"], client)
    transcripts = await TranscriptRepository(client).list_for_owner(
        user.id,
        from_value=get_query_param(request, "from"),
        to_value=get_query_param(request, "to"),
        transcript_id=get_query_param(request, "transcriptId"),
    )
    return json_response(200, {
        "transcripts": [transcript.model_dump(by_alias=True) for transcript in transcripts],
    })


class handler(VercelHandler):
    routes = {"GET": Route(list_transcripts, "Failed to fetch transcripts")}
