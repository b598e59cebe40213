import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Path

from api.dependencies import (
    enforce_rate_limit,
    get_current_user_id,
    get_rate_limiters,
    verify_admin_secret,
)
from api.errors import raise_for_error
from api.schemas import RateLimitStatus, RefreshStandingsIn, UpgradeUserIn
from core.database import get_db
from core.limiters import RateLimiters
from services.admin import AdminService
from services.football_data import FootballDataClient
from services.gameweeks import GameweekService, get_current_gameweek, get_gameweek_by_number
from services.standings import StandingsService
from services.sync import SyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(verify_admin_secret)])


@router.post("/sync/teams")
async def sync_teams(
    user_id: str = Depends(get_current_user_id),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    enforce_rate_limit(limiters.admin_sync, user_id, "sync data")
    return await _run_sync(lambda service: service.sync_teams())


@router.post("/sync/fixtures/{gameweek}")
async def sync_fixtures(
    gameweek: int = Path(ge=1, le=38),
    user_id: str = Depends(get_current_user_id),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    enforce_rate_limit(limiters.admin_sync, user_id, "sync data")
    return await _run_sync(lambda service: service.sync_fixtures(gameweek))


@router.post("/upgrade-user")
async def upgrade_user(
    body: UpgradeUserIn,
    user_id: str = Depends(get_current_user_id),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    enforce_rate_limit(limiters.admin_sync, user_id, "upgrade a user")
    async with get_db() as db:
        result = await AdminService(db).upgrade_user(body.email.strip())
    return raise_for_error(result)


@router.post("/standings/refresh")
async def refresh_standings(
    body: RefreshStandingsIn,
    user_id: str = Depends(get_current_user_id),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    enforce_rate_limit(limiters.admin_sync, user_id, "refresh standings")
    async with get_db() as db:
        if body.gameweek:
            gameweek = await get_gameweek_by_number(db, body.gameweek)
        else:
            gameweek = await get_current_gameweek(db)
        if not gameweek:
            raise HTTPException(status_code=404, detail="Gameweek not found")

        service = StandingsService(db)
        scores = await service.calculate_gameweek_scores(gameweek.id)
        standings = await service.refresh_standings()
    return {"success": True, "scored": scores["scored"], "users": standings["users"]}


@router.post("/gameweeks/advance")
async def advance_gameweek(
    user_id: str = Depends(get_current_user_id),
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    enforce_rate_limit(limiters.admin_sync, user_id, "advance the gameweek")
    async with get_db() as db:
        result = await GameweekService(db).advance()
    return raise_for_error(result)


@router.get("/rate-limits/{limiter}/{key}", response_model=RateLimitStatus)
async def rate_limit_status(
    limiter: str,
    key: str,
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    remaining = _limiter_or_404(limiters, limiter).get_time_until_reset(key)
    return RateLimitStatus(limiter=limiter, key=key, time_until_reset=remaining)


@router.delete("/rate-limits/{limiter}/{key}")
async def clear_rate_limit(
    limiter: str,
    key: str,
    limiters: RateLimiters = Depends(get_rate_limiters),
):
    _limiter_or_404(limiters, limiter).clear(key)
    logger.info("Rate limit cleared: limiter=%s key=%s", limiter, key)
    return {"success": True}


def _limiter_or_404(limiters: RateLimiters, name: str):
    instance = limiters.get(name)
    if instance is None:
        raise HTTPException(status_code=404, detail=f"Unknown rate limiter: {name}")
    return instance


async def _run_sync(operation) -> dict:
    client = FootballDataClient()
    try:
        async with get_db() as db:
            result = await operation(SyncService(db, client))
    except httpx.HTTPError as e:
        logger.error("Football data sync failed: %s", e)
        raise HTTPException(status_code=502, detail="Football data API request failed")
    finally:
        await client.aclose()
    return raise_for_error(result)
