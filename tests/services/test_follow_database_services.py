from unittest.mock import MagicMock

import pytest

from app.services.database.follow_database_services import (
    follow_user,
    get_follow_stats,
    is_following,
    unfollow_user,
)


@pytest.mark.asyncio
async def test_self_follow_is_rejected_before_touching_the_database(mock_db):
    with pytest.raises(ValueError, match="Cannot follow yourself"):
        await follow_user(mock_db, "alice@example.com", "alice@example.com")
    mock_db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_follow_reports_new_edge(mock_db, make_result):
    mock_db.execute.return_value = make_result(first=("alice@example.com",))

    assert await follow_user(mock_db, "alice@example.com", "bob@example.com") is True
    mock_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_repeated_follow_is_a_no_op(mock_db, make_result):
    mock_db.execute.return_value = make_result(first=None)

    assert await follow_user(mock_db, "alice@example.com", "bob@example.com") is False


@pytest.mark.asyncio
async def test_unfollow_without_edge_succeeds(mock_db, make_result):
    mock_db.execute.return_value = make_result(first=None)

    assert await unfollow_user(mock_db, "alice@example.com", "bob@example.com") is False
    mock_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_is_following(mock_db, make_result):
    mock_db.execute.return_value = make_result(scalar=True)

    assert await is_following(mock_db, "alice@example.com", "bob@example.com") is True


@pytest.mark.asyncio
async def test_follow_stats(mock_db):
    result = MagicMock()
    result.one.return_value = MagicMock(followers_count=3, following_count=1)
    mock_db.execute.return_value = result

    assert await get_follow_stats(mock_db, "bob@example.com") == {"followers_count": 3, "following_count": 1}
