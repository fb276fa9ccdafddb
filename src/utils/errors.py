"""Error handling utilities."""

from typing import Optional


class VerbalyticsError(Exception):
    """Base exception for the Verbalytics backend."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[list[str]] = None,
        http_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if http_status is not None:
            self.http_status = http_status


class RequestValidationError(VerbalyticsError):
    """Malformed request body or missing fields."""
    http_status = 400


class UnauthorizedError(VerbalyticsError):
    """Missing or invalid credentials."""
    http_status = 401


class ForbiddenError(VerbalyticsError):
    """Authenticated user lacks the required role."""
    http_status = 403


class NotFoundError(VerbalyticsError):
    """Record does not exist or belongs to another tenant."""
    http_status = 404


class ConflictError(VerbalyticsError):
    """Unique constraint violated on a single-record write."""
    http_status = 400


class SchemaError(VerbalyticsError):
    """CSV header is missing required columns."""
    http_status = 400

    def __init__(self, missing_columns: list[str]):
        self.missing_columns = missing_columns
        super().__init__(
            f"CSV is missing required columns: {', '.join(missing_columns)}",
            details=list(missing_columns),
        )


class RowValidationError(VerbalyticsError):
    """A single CSV row failed validation."""
    http_status = 400

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        super().__init__(f"Row {line_number}: {reason}")


class PersistenceError(VerbalyticsError):
    """A single agent row could not be written."""

    def __init__(self, agent_code: str, reason: str):
        self.agent_code = agent_code
        super().__init__(f"Agent {agent_code}: {reason}")


class EmptyBatchError(VerbalyticsError):
    """No rows survived validation or persistence."""
    http_status = 400


class SupabaseError(VerbalyticsError):
    """Supabase operation error."""
    pass


class IntegrationError(VerbalyticsError):
    """Third-party integration (email, issue tracker, CAPTCHA) error."""
    pass
