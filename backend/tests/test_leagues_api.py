import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_rate_limiters
from config import settings
from core.limiters import build_rate_limiters
from main import app
from models.league import League

HEADERS = {"X-User-Id": "user1"}


@pytest.fixture
def limiters():
    return build_rate_limiters(settings)


@pytest.fixture
def client(limiters):
    app.dependency_overrides[get_rate_limiters] = lambda: limiters
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_get_db():
    with patch("api.leagues.get_db") as mock_get_db:
        mock_get_db.return_value.__aenter__ = AsyncMock(return_value=AsyncMock())
        mock_get_db.return_value.__aexit__ = AsyncMock(return_value=False)
        yield mock_get_db


@pytest.fixture
def mock_service(mock_get_db):
    with patch("api.leagues.LeagueService") as mock_service_cls:
        service = AsyncMock()
        mock_service_cls.return_value = service
        yield service


def _league() -> League:
    return League(
        id=uuid.uuid4(),
        name="Friends",
        description=None,
        invite_code="ABC123",
        creator_id="user1",
        is_public=False,
        max_members=None,
        created_at=datetime.now(timezone.utc),
    )


def test_missing_user_header(client):
    resp = client.post("/leagues", json={"name": "Friends"})
    assert resp.status_code == 422


def test_create_league(client, mock_service):
    mock_service.create_league.return_value = {"success": True, "league": _league()}

    resp = client.post("/leagues", json={"name": "Friends", "max_members": 12}, headers=HEADERS)

    assert resp.status_code == 201
    assert resp.json()["invite_code"] == "ABC123"
    mock_service.create_league.assert_awaited_once_with(
        "user1", name="Friends", description=None, is_public=False, max_members=12
    )


def test_create_league_rate_limited(client, mock_service):
    mock_service.create_league.return_value = {"success": True, "league": _league()}

    for i in range(5):
        resp = client.post("/leagues", json={"name": f"League {i}"}, headers=HEADERS)
        assert resp.status_code == 201, f"Request {i+1} failed unexpectedly"

    resp = client.post("/leagues", json={"name": "One Too Many"}, headers=HEADERS)
    assert resp.status_code == 429
    assert 590 <= int(resp.headers["Retry-After"]) <= 600
    assert "create a league" in resp.json()["detail"]
    assert mock_service.create_league.await_count == 5

    # Other callers keep their own budget
    resp = client.post("/leagues", json={"name": "Other"}, headers={"X-User-Id": "user2"})
    assert resp.status_code == 201


def test_create_league_service_error(client, mock_service):
    mock_service.create_league.return_value = {"error": "limit", "code": "league_limit"}
    resp = client.post("/leagues", json={"name": "Friends"}, headers=HEADERS)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "limit"


def test_create_league_rejects_bad_max_members(client, mock_service):
    resp = client.post("/leagues", json={"name": "Friends", "max_members": 1}, headers=HEADERS)
    assert resp.status_code == 422


def test_join_league_rate_limited(client, mock_service, limiters):
    mock_service.join_league.return_value = {"error": "No league", "code": "not_found"}

    for _ in range(10):
        resp = client.post("/leagues/join", json={"invite_code": "ZZZ999"}, headers=HEADERS)
        assert resp.status_code == 404

    resp = client.post("/leagues/join", json={"invite_code": "ZZZ999"}, headers=HEADERS)
    assert resp.status_code == 429

    limiters.league_join.clear("user1")
    resp = client.post("/leagues/join", json={"invite_code": "ZZZ999"}, headers=HEADERS)
    assert resp.status_code == 404


def test_join_league(client, mock_service):
    league = _league()
    mock_service.join_league.return_value = {"success": True, "league": league}
    resp = client.post("/leagues/join", json={"invite_code": "abc123"}, headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()["id"] == str(league.id)


def test_leave_league_forbidden(client, mock_service):
    mock_service.leave_league.return_value = {"error": "nope", "code": "forbidden"}
    resp = client.delete(f"/leagues/{uuid.uuid4()}/membership", headers=HEADERS)
    assert resp.status_code == 403


def test_security_headers(client, mock_service):
    mock_service.get_user_leagues.return_value = []
    resp = client.get("/leagues", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json() == []
    assert resp.headers["X-Frame-Options"] == "DENY"
