import logging
import uuid

from fastapi import APIRouter, Depends

from api.dependencies import enforce_rate_limit, get_current_user_id, get_rate_limiters
from api.errors import raise_for_error
from api.schemas import LeagueCreate, LeagueJoin, LeagueOut, LeagueStandingOut, MemberOut
from core.database import get_db
from core.limiters import RateLimiters
from services.leagues import LeagueService
from services.standings import StandingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leagues", tags=["leagues"])


@router.get("", response_model=list[LeagueOut])
async def my_leagues(user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        return await LeagueService(db).get_user_leagues(user_id)


@router.post("", response_model=LeagueOut, status_code=201)
async def create_league(
    body: LeagueCreate,
    user_id: str = Depends(get_current_user_id),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    enforce_rate_limit(limiters.league_create, user_id, "create a league")

    async with get_db() as db:
        result = await LeagueService(db).create_league(
            user_id,
            name=body.name,
            description=body.description,
            is_public=body.is_public,
            max_members=body.max_members,
        )
        raise_for_error(result)
        return result["league"]


@router.post("/join", response_model=LeagueOut)
async def join_league(
    body: LeagueJoin,
    user_id: str = Depends(get_current_user_id),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    enforce_rate_limit(limiters.league_join, user_id, "join a league")

    async with get_db() as db:
        result = await LeagueService(db).join_league(user_id, body.invite_code)
        raise_for_error(result)
        return result["league"]


@router.delete("/{league_id}/membership")
async def leave_league(league_id: uuid.UUID, user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        result = await LeagueService(db).leave_league(user_id, league_id)
    raise_for_error(result)
    return {"success": True}


@router.get("/{league_id}/members", response_model=list[MemberOut])
async def league_members(league_id: uuid.UUID, user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        return await LeagueService(db).get_members(league_id)


@router.get("/{league_id}/standings", response_model=list[LeagueStandingOut])
async def league_standings(league_id: uuid.UUID, user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        return await StandingsService(db).get_league_standings(league_id)
