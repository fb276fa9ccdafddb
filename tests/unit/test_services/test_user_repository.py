"""Tests for the users table repository."""

import pytest
from unittest.mock import MagicMock
from src.services.user_repository import UserRepository
from src.utils.errors import ConflictError, NotFoundError, SupabaseError
from tests.utils.factories import create_user_data
from tests.utils.helpers import create_query_chain, mock_query_result


def make_repository(query):
    client = MagicMock()
    client.table.return_value = query
    return UserRepository(client)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_by_supabase_id():
    row = create_user_data()
    query = create_query_chain(mock_query_result([row]))

    user = await make_repository(query).get_by_supabase_id(row["supabase_id"])

    assert user.id == row["id"]
    query.eq.assert_called_with("supabase_id", row["supabase_id"])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_by_id_not_found():
    with pytest.raises(NotFoundError):
        await make_repository(create_query_chain()).get_by_id("missing")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_duplicate_email_is_conflict():
    query = create_query_chain()
    query.execute.side_effect = Exception('duplicate key value violates unique constraint "users_email_key"')

    with pytest.raises(ConflictError) as exc_info:
        await make_repository(query).update("01JEXAMPLEUSER0000000000AB", {"email": "taken@x.com"})

    assert exc_info.value.message == "Email already in use"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_other_failure():
    query = create_query_chain()
    query.execute.side_effect = Exception("timeout")

    with pytest.raises(SupabaseError):
        await make_repository(query).update("01JEXAMPLEUSER0000000000AB", {"name": "Jane"})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps():
    query = create_query_chain()
    query.execute.side_effect = lambda: mock_query_result([query.insert.call_args[0][0]])

    user = await make_repository(query).create({
        "supabase_id": "abc",
        "email": "jane@x.com",
        "role": "subscriber",
    })

    assert len(user.id) == 26
    assert user.created_at == user.updated_at
