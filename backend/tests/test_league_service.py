import re
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from models.league import League, LeagueMember
from services.leagues import LeagueService


@pytest.fixture
def mock_db():
    db = AsyncMock()
    db.add = MagicMock()
    db.flush = AsyncMock()
    return db


@pytest.fixture
def service(mock_db):
    return LeagueService(mock_db)


def _league(**kwargs) -> League:
    params = {
        "id": uuid.uuid4(),
        "name": "Friends",
        "invite_code": "ABC123",
        "creator_id": "owner",
        "max_members": None,
    }
    params.update(kwargs)
    return League(**params)


async def test_create_league(service, mock_db):
    mock_db.scalar = AsyncMock(side_effect=[0, None])

    result = await service.create_league("u1", "  Office <Survivors> ", "Win it all", True, 20)

    assert result["success"] is True
    league = result["league"]
    assert league.name == "Office Survivors"
    assert league.creator_id == "u1"
    assert league.is_public is True
    assert league.max_members == 20
    assert re.fullmatch(r"[A-Z0-9]{6}", league.invite_code)

    added = [call.args[0] for call in mock_db.add.call_args_list]
    assert added[0] is league
    assert isinstance(added[1], LeagueMember)
    assert added[1].user_id == "u1"


async def test_create_league_limit(service, mock_db):
    mock_db.scalar = AsyncMock(return_value=10)
    result = await service.create_league("u1", "Eleventh League")
    assert result["code"] == "league_limit"
    mock_db.add.assert_not_called()


async def test_create_league_invalid_name(service, mock_db):
    mock_db.scalar = AsyncMock(return_value=0)
    result = await service.create_league("u1", "<>")
    assert result["code"] == "invalid"


async def test_create_league_retries_taken_codes(service, mock_db):
    mock_db.scalar = AsyncMock(side_effect=[0, uuid.uuid4(), uuid.uuid4(), None])
    result = await service.create_league("u1", "Lucky Third")
    assert result["success"] is True
    assert mock_db.scalar.await_count == 4


async def test_create_league_no_free_code(service, mock_db):
    mock_db.scalar = AsyncMock(side_effect=[0] + [uuid.uuid4()] * 5)
    result = await service.create_league("u1", "Unlucky")
    assert result["code"] == "conflict"


async def test_join_league(service, mock_db):
    league = _league()
    mock_db.scalar = AsyncMock(side_effect=[league, None])

    result = await service.join_league("u2", " abc-123 ")

    assert result == {"success": True, "league": league}
    member = mock_db.add.call_args.args[0]
    assert (member.league_id, member.user_id) == (league.id, "u2")


async def test_join_league_invalid_code(service, mock_db):
    result = await service.join_league("u2", "AB1")
    assert result["code"] == "invalid"
    mock_db.scalar.assert_not_awaited()


async def test_join_league_unknown_code(service, mock_db):
    mock_db.scalar = AsyncMock(return_value=None)
    result = await service.join_league("u2", "ZZZ999")
    assert result["code"] == "not_found"
    assert "ZZZ999" in result["error"]


async def test_join_league_already_member(service, mock_db):
    league = _league()
    mock_db.scalar = AsyncMock(side_effect=[league, LeagueMember(user_id="u2")])
    result = await service.join_league("u2", "ABC123")
    assert result["code"] == "already_member"


async def test_join_league_full(service, mock_db):
    league = _league(max_members=2)
    mock_db.scalar = AsyncMock(side_effect=[league, None, 2])
    result = await service.join_league("u2", "ABC123")
    assert result["code"] == "league_full"
    mock_db.add.assert_not_called()


async def test_leave_league_creator_forbidden(service, mock_db):
    league = _league(creator_id="u1")
    mock_db.scalar = AsyncMock(return_value=league)
    result = await service.leave_league("u1", league.id)
    assert result["code"] == "forbidden"


async def test_leave_league(service, mock_db):
    league = _league()
    membership = LeagueMember(league_id=league.id, user_id="u2")
    mock_db.scalar = AsyncMock(side_effect=[league, membership])

    result = await service.leave_league("u2", league.id)

    assert result == {"success": True}
    mock_db.delete.assert_awaited_once_with(membership)
