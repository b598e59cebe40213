import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from models.gameweek import Fixture
from models.pick import GameweekScore, Pick, UserStanding
from services.standings import StandingsService, StandingTotals, assign_ranks

HOME = uuid.uuid4()
AWAY = uuid.uuid4()


@pytest.fixture
def mock_db():
    db = AsyncMock()
    db.add = MagicMock()
    db.flush = AsyncMock()
    return db


def _rows(rows):
    result = MagicMock()
    result.all.return_value = rows
    return result


def _scalars(items):
    scalars = MagicMock()
    scalars.all.return_value = items
    result = MagicMock()
    result.scalars.return_value = scalars
    return result


def _finished(home_score: int, away_score: int) -> Fixture:
    return Fixture(
        id=uuid.uuid4(),
        home_team_id=HOME,
        away_team_id=AWAY,
        status="finished",
        home_score=home_score,
        away_score=away_score,
    )


class TestAssignRanks:
    def test_ties_share_rank(self):
        ranked = assign_ranks([
            StandingTotals("c", 3, 3, 5),
            StandingTotals("a", 5, 5, 5),
            StandingTotals("b", 3, 3, 4),
            StandingTotals("d", 1, 1, 5),
        ])
        assert [(row.user_id, rank) for row, rank in ranked] == [
            ("a", 1), ("b", 2), ("c", 2), ("d", 3),
        ]

    def test_empty(self):
        assert assign_ranks([]) == []


def test_fixture_winner():
    assert _finished(2, 1).winner_id() == HOME
    assert _finished(0, 1).winner_id() == AWAY
    assert _finished(1, 1).winner_id() is None
    assert Fixture(home_team_id=HOME, away_team_id=AWAY).winner_id() is None


async def test_calculate_gameweek_scores(mock_db):
    gw_id = uuid.uuid4()
    fixture = _finished(3, 0)
    right = Pick(user_id="u1", gameweek_id=gw_id, picked_team_id=HOME)
    wrong = Pick(user_id="u2", gameweek_id=gw_id, picked_team_id=AWAY)
    stale = GameweekScore(user_id="u2", gameweek_id=gw_id, points=1, is_correct=True)
    mock_db.execute = AsyncMock(side_effect=[
        _rows([(right, fixture), (wrong, fixture)]),
        _scalars([stale]),
    ])

    result = await StandingsService(mock_db).calculate_gameweek_scores(gw_id)

    assert result == {"success": True, "scored": 2, "correct": 1}
    created = mock_db.add.call_args.args[0]
    assert (created.user_id, created.points, created.is_correct) == ("u1", 1, True)
    assert (stale.points, stale.is_correct) == (0, False)


async def test_refresh_standings(mock_db):
    existing = UserStanding(user_id="u2", total_points=0, correct_picks=0, total_picks=0)
    mock_db.execute = AsyncMock(side_effect=[
        _rows([("u1", 4, 4, 6), ("u2", 6, 6, 6), ("u3", None, None, 1)]),
        _scalars([existing]),
    ])

    result = await StandingsService(mock_db).refresh_standings()

    assert result == {"success": True, "users": 3}
    assert (existing.total_points, existing.current_rank) == (6, 1)
    added = {call.args[0].user_id: call.args[0] for call in mock_db.add.call_args_list}
    assert added["u1"].current_rank == 2
    assert (added["u3"].total_points, added["u3"].current_rank) == (0, 3)


async def test_league_standings_rank_within_league(mock_db):
    league_id = uuid.uuid4()
    mock_db.execute = AsyncMock(return_value=_scalars([
        UserStanding(user_id="u1", total_points=2, correct_picks=2, total_picks=3, current_rank=40),
        UserStanding(user_id="u2", total_points=7, correct_picks=7, total_picks=8, current_rank=3),
    ]))

    rows = await StandingsService(mock_db).get_league_standings(league_id)

    assert [(r["user_id"], r["current_rank"]) for r in rows] == [("u2", 1), ("u1", 2)]
    assert all(r["league_id"] == league_id for r in rows)


async def test_efficiency(mock_db):
    mock_db.execute = AsyncMock(return_value=_rows([(1, 1), (2, 0)]))
    items = await StandingsService(mock_db).get_efficiency("u1")
    assert [(i.gameweek, i.efficiency) for i in items] == [(1, 100.0), (2, 0.0)]
