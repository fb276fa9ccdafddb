"""Request/response plumbing shared by the Vercel handlers under api/."""

import asyncio
import json
from email.parser import BytesParser
from email.policy import HTTP
from http.server import BaseHTTPRequestHandler
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel

from src.services.supabase_client import SupabaseClient
from src.utils.config import is_development
from src.utils.errors import RequestValidationError, VerbalyticsError
from src.utils.logging import correlation_context, get_structured_logger, mask_sensitive_data
from src.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

RouteFunc = Callable[[dict, Any], Awaitable[dict]]


class Route:
    """One method of an endpoint.

    `failure_message` is the error shown when the route raises something
    other than a VerbalyticsError. Routes that never touch the database set
    `uses_database=False` and receive None as their client.
    """

    def __init__(
        self,
        func: RouteFunc,
        failure_message: str = "Internal server error",
        uses_database: bool = True,
    ):
        self.func = func
        self.failure_message = failure_message
        self.uses_database = uses_database


class UploadedFile(BaseModel):
    filename: str
    content_type: str
    content: bytes

    def text(self) -> str:
        # utf-8-sig drops the BOM spreadsheet tools prepend
        return self.content.decode("utf-8-sig")


def json_response(status_code: int, body: Any, headers: Optional[dict[str, str]] = None) -> dict:
    """Build a Vercel-style response dict."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **(headers or {})},
        "body": json.dumps(body),
    }


def error_response(status_code: int, error: str, details: Any = None) -> dict:
    body: dict[str, Any] = {"error": error}
    if details:
        body["details"] = details
    return json_response(status_code, body)


def redirect_response(location: str) -> dict:
    return {"statusCode": 302, "headers": {"Location": location}, "body": ""}


def build_request(method: str, raw_path: str, headers: Any, body: bytes) -> dict:
    """Normalize an incoming request into the dict routes operate on."""
    parsed = urlparse(raw_path)
    query = {key: values[0] for key, values in parse_qs(parsed.query).items()}
    return {
        "method": method,
        "path": parsed.path,
        "headers": {key.lower(): value for key, value in headers.items()},
        "body": body,
        "query": query,
    }


def get_query_param(request: dict, name: str) -> Optional[str]:
    value = (request.get("query") or {}).get(name)
    if isinstance(value, list):
        value = value[0] if value else None
    return value


def _body_bytes(request: dict) -> bytes:
    body = request.get("body") or b""
    return body.encode("utf-8") if isinstance(body, str) else body


def get_json_body(request: dict) -> dict:
    """Decode a JSON object body; anything else is a 400."""
    raw = _body_bytes(request)
    if not raw:
        raise RequestValidationError("Request body is required")
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestValidationError("Invalid JSON body")
    if not isinstance(body, dict):
        raise RequestValidationError("Invalid JSON body")
    return body


def get_uploaded_file(request: dict, field_name: str = "file") -> Optional[UploadedFile]:
    """Return the named file part of a multipart/form-data body, if present."""
    content_type = request["headers"].get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise RequestValidationError("Expected multipart/form-data")

    envelope = f"Content-Type: {content_type}\r\n\r\n".encode("utf-8") + _body_bytes(request)
    message = BytesParser(policy=HTTP).parsebytes(envelope)
    if not message.is_multipart():
        raise RequestValidationError("Malformed multipart body")

    for part in message.iter_parts():
        if part.get_param("name", header="content-disposition") != field_name:
            continue
        filename = part.get_filename()
        if filename is None:
            continue
        return UploadedFile(
            filename=filename,
            content_type=part.get_content_type(),
            content=part.get_payload(decode=True) or b"",
        )
    return None


async def dispatch(route: Route, request: dict) -> dict:
    """Run a route with a request-scoped Supabase client and map errors to responses."""
    correlation_id = request["headers"].get(LoggingConfig.LOG_CORRELATION_ID_HEADER.lower())
    with correlation_context(correlation_id):
        try:
            if route.uses_database:
                async with SupabaseClient() as client:
                    return await route.func(request, client)
            return await route.func(request, None)
        except VerbalyticsError as e:
            log = logger.error if e.http_status >= 500 else logger.info
            log(
                "Request failed",
                path=request.get("path"),
                method=request.get("method"),
                status_code=e.http_status,
                error=mask_sensitive_data(e.message),
            )
            return error_response(e.http_status, e.message, e.details)
        except Exception as e:
            logger.exception(
                route.failure_message,
                path=request.get("path"),
                method=request.get("method"),
            )
            return error_response(500, route.failure_message, str(e) if is_development() else None)


class VercelHandler(BaseHTTPRequestHandler):
    """Vercel serverless function handler dispatching to `routes` by method."""

    routes: dict[str, Route] = {}

    def _handle(self, method: str) -> None:
        LoggingConfig.setup_logging()
        route = self.routes.get(method)
        if route is None:
            self._write(error_response(405, "Method not allowed"))
            return

        content_length = int(self.headers.get("Content-Length", 0) or 0)
        body = self.rfile.read(content_length) if content_length > 0 else b""
        request = build_request(method, self.path, self.headers, body)
        self._write(asyncio.run(dispatch(route, request)))

    def _write(self, response: dict) -> None:
        self.send_response(response["statusCode"])
        for name, value in response.get("headers", {}).items():
            self.send_header(name, value)
        self.end_headers()
        if response.get("body"):
            self.wfile.write(response["body"].encode("utf-8"))

    def do_GET(self):
        self._handle("GET")

    def do_POST(self):
        self._handle("POST")

    def do_PATCH(self):
        self._handle("PATCH")

    def do_DELETE(self):
        self._handle("DELETE")
