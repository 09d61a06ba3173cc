from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from app.services.database.search_utils import contains_pattern
from app.services.database.user_database_services import search_users, update_user_profile


def test_contains_pattern_escapes_wildcards():
    assert contains_pattern(" 100%_Off ") == "%100\\%\\_off%"
    assert contains_pattern("a\\b") == "%a\\\\b%"


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(mock_db):
    result = MagicMock()
    result.all.return_value = []
    mock_db.execute.return_value = result

    await search_users(mock_db, "a_b")

    statement = mock_db.execute.await_args.args[0]
    query = statement.compile()
    assert "ESCAPE" in str(query)
    assert "%a\\_b%" in query.params.values()


@pytest.mark.asyncio
async def test_taken_handle_is_rejected(mock_db, make_result, test_user):
    mock_db.execute.return_value = make_result(scalar=True)

    with pytest.raises(ValueError, match="Username already taken"):
        await update_user_profile(mock_db, test_user, handle="bob")
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_handle_claimed_concurrently_is_reported_as_taken(mock_db, make_result, test_user):
    mock_db.execute.return_value = make_result(scalar=False)
    mock_db.commit.side_effect = IntegrityError("UPDATE users", {}, Exception("duplicate key"))

    with pytest.raises(ValueError, match="Username already taken"):
        await update_user_profile(mock_db, test_user, handle="bob")
    mock_db.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_social_links_are_trimmed(mock_db, test_user):
    await update_user_profile(mock_db, test_user, social_links={"github": "  alice  ", "website": "   "})

    assert test_user.github == "alice"
    assert test_user.website is None
    mock_db.commit.assert_awaited_once()
