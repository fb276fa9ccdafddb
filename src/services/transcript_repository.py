"""Transcripts table queries."""

from datetime import date, datetime, time, timezone
from typing import Optional

from supabase import Client

from src.models.transcript import Transcript
from src.services.supabase_client import all_rows
from src.utils.errors import SupabaseError

TRANSCRIPTS_TABLE = "transcripts"


def parse_date_param(value: Optional[str]) -> Optional[date]:
    """Parse a yyyy-mm-dd (or ISO datetime) query value; invalid values are ignored."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def date_range_bounds(
    from_value: Optional[str],
    to_value: Optional[str],
) -> tuple[Optional[str], Optional[str]]:
    """ISO bounds for a from/to filter; 'to' is inclusive to the end of that UTC day."""
    from_date = parse_date_param(from_value)
    to_date = parse_date_param(to_value)
    lower = (
        datetime.combine(from_date, time.min, tzinfo=timezone.utc).isoformat()
        if from_date else None
    )
    upper = (
        datetime.combine(to_date, time.max, tzinfo=timezone.utc).isoformat()
        if to_date else None
    )
    return lower, upper


class TranscriptRepository:
    def __init__(self, client: Client):
        self.client = client

    async def list_for_owner(
        self,
        owner_id: str,
        from_value: Optional[str] = None,
        to_value: Optional[str] = None,
        transcript_id: Optional[str] = None,
    ) -> list[Transcript]:
        """Transcripts newest first, filtered by date range and transcript ID substring."""
        lower, upper = date_range_bounds(from_value, to_value)
        try:
            query = self.client.table(TRANSCRIPTS_TABLE).select("*").eq("user_id", owner_id)
            if lower:
                query = query.gte("timestamp", lower)
            if upper:
                query = query.lte("timestamp", upper)
            if transcript_id and transcript_id.strip():
                query = query.ilike("transcript_id", f"%{transcript_id.strip()}%")
            result = query.order("timestamp", desc=True).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to list transcripts: {e}")
        return [Transcript(**row) for row in all_rows(result)]
