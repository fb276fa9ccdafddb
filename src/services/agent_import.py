"""CSV agent import - tokenize, validate and upsert agent rows for one tenant."""

import re
from typing import Optional

from src.models.agent import Agent
from src.models.agent_import import ImportOutcome, ImportRow
from src.services.agent_repository import AgentStore
from src.utils.errors import (
    EmptyBatchError,
    PersistenceError,
    RequestValidationError,
    RowValidationError,
    SchemaError,
    VerbalyticsError,
)
from src.utils.logging import get_structured_logger, log_timing, mask_sensitive_data, mask_user_id
from src.utils.validation import clean_optional, is_valid_email

logger = get_structured_logger(__name__)

REQUIRED_COLUMNS = ("code", "first", "last", "email")
OPTIONAL_COLUMNS = ("phone", "slack", "discord")

# Dashboard field names and common spellings accepted in the header row
COLUMN_ALIASES = {
    "agentid": "code",
    "agent_id": "code",
    "agentname": "first",
    "first_name": "first",
    "agentsurname": "last",
    "last_name": "last",
    "agentemail": "email",
    "e-mail": "email",
    "agentphone": "phone",
    "agentslack": "slack",
    "agentdiscord": "discord",
}

# Value used in every cell of the downloadable template row
PLACEHOLDER_VALUE = "required"

_LINE_BREAK = re.compile(r"\r?\n")


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields.

    Double quotes toggle quoting; a doubled quote inside a quoted field is a
    literal quote. Unterminated quotes are not rejected.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def strip_quotes(value: str) -> str:
    """Remove one pair of surrounding double quotes left after tokenizing."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def split_lines(text: str) -> list[str]:
    """Split raw file text into lines, dropping blank ones."""
    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def canonical_column(name: str) -> str:
    key = name.strip().lower()
    return COLUMN_ALIASES.get(key, key)


def validate_header(fields: list[str]) -> list[str]:
    """Map header fields to canonical column names.

    Raises SchemaError naming every missing required column.
    """
    headers = [canonical_column(strip_quotes(field)) for field in fields]
    missing = [column for column in REQUIRED_COLUMNS if column not in headers]
    if missing:
        raise SchemaError(missing)
    return headers


def _is_placeholder_row(values: list[str]) -> bool:
    filled = [value for value in values if value]
    return bool(filled) and all(value.lower() == PLACEHOLDER_VALUE for value in filled)


def validate_row(line: str, headers: list[str], line_number: int) -> Optional[ImportRow]:
    """Validate one data line.

    Returns None for rows that are skipped silently (blank or template rows)
    and raises RowValidationError for rows that are rejected.
    """
    values = [strip_quotes(value).strip() for value in parse_csv_line(line)]
    if not any(values):
        return None
    if _is_placeholder_row(values):
        return None

    fields: dict[str, str] = {}
    for index, header in enumerate(headers):
        # First occurrence wins when a column is repeated
        if header not in fields:
            fields[header] = values[index] if index < len(values) else ""

    missing = [column for column in REQUIRED_COLUMNS if not fields.get(column)]
    if missing:
        raise RowValidationError(line_number, f"Missing required fields: {', '.join(missing)}")

    if not is_valid_email(fields["email"]):
        raise RowValidationError(line_number, f"Invalid email format: {fields['email']}")

    return ImportRow(
        line_number=line_number,
        code=fields["code"],
        first=fields["first"],
        last=fields["last"],
        email=fields["email"],
        phone=clean_optional(fields.get("phone")),
        slack=clean_optional(fields.get("slack")),
        discord=clean_optional(fields.get("discord")),
    )


def validate_rows(lines: list[str], headers: list[str]) -> tuple[list[ImportRow], list[str]]:
    """Validate every data line; row errors are collected, never raised."""
    rows: list[ImportRow] = []
    errors: list[str] = []

    for index in range(1, len(lines)):
        try:
            row = validate_row(lines[index], headers, index + 1)
        except RowValidationError as e:
            errors.append(e.message)
            continue
        if row is not None:
            rows.append(row)

    return rows, errors


async def upsert_rows(
    rows: list[ImportRow],
    owner_id: str,
    store: AgentStore,
) -> tuple[list[Agent], list[str]]:
    """Insert or update each row by (owner, code), sequentially.

    A failing row is recorded and the batch continues.
    """
    persisted: list[Agent] = []
    errors: list[str] = []

    for row in rows:
        fields = row.to_agent_fields()
        try:
            existing = await store.find_by_code(owner_id, row.code)
            if existing:
                agent = await store.update(owner_id, existing.id, fields)
            else:
                agent = await store.insert(owner_id, row.code, fields)
        except Exception as e:
            reason = e.message if isinstance(e, VerbalyticsError) else str(e)
            error = PersistenceError(row.code, reason)
            logger.warning(
                "Agent row failed to persist",
                line_number=row.line_number,
                error=mask_sensitive_data(error.message),
            )
            errors.append(error.message)
            continue
        persisted.append(agent)

    return persisted, errors


async def import_agents_csv(text: str, owner_id: str, store: AgentStore) -> ImportOutcome:
    """Run the full import for one uploaded file."""
    with log_timing("agent_csv_import", logger=logger, owner_id=mask_user_id(owner_id)):
        lines = split_lines(text)
        if len(lines) < 2:
            raise RequestValidationError("CSV file is empty or invalid")

        headers = validate_header(parse_csv_line(lines[0]))
        rows, validation_errors = validate_rows(lines, headers)

        logger.info(
            "CSV rows validated",
            data_lines=len(lines) - 1,
            valid_rows=len(rows),
            rejected_rows=len(validation_errors),
        )

        if not rows and validation_errors:
            raise EmptyBatchError("No valid rows found in CSV", details=validation_errors)

        persisted, persistence_errors = await upsert_rows(rows, owner_id, store)
        errors = validation_errors + persistence_errors

        if not persisted and persistence_errors:
            raise EmptyBatchError("Failed to import agents", details=errors, http_status=500)

        logger.info(
            "Agent import finished",
            processed=len(persisted),
            error_count=len(errors),
        )
        return ImportOutcome(processed=len(persisted), errors=errors, data=persisted)
