import logging
from dataclasses import asdict

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_user_id
from api.schemas import EfficiencySummary, FixtureDifficultyOut, ScoreOut, StandingOut
from core.analytics import calc_overall_efficiency, process_fixture_difficulty
from core.database import get_db
from services.fixtures import FixtureService
from services.football_data import FootballDataClient
from services.standings import StandingsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["standings"])


@router.get("/standings", response_model=list[StandingOut])
async def standings():
    async with get_db() as db:
        return await StandingsService(db).get_standings()


@router.get("/standings/scores", response_model=list[ScoreOut])
async def my_scores(user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        return await StandingsService(db).get_gameweek_scores(user_id)


@router.get("/standings/efficiency", response_model=EfficiencySummary)
async def my_efficiency(user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        items = await StandingsService(db).get_efficiency(user_id)
    return {"overall": calc_overall_efficiency(items), "gameweeks": [asdict(i) for i in items]}


@router.get("/standings/epl")
async def epl_table():
    client = FootballDataClient()
    try:
        return {"standings": await client.get_standings()}
    except httpx.HTTPError as e:
        logger.error("League table fetch failed: %s", e)
        raise HTTPException(status_code=502, detail="Could not fetch league table")
    finally:
        await client.aclose()


@router.get("/fixtures/difficulty", response_model=list[FixtureDifficultyOut])
async def fixture_difficulty(gameweek: int = Query(1, ge=1, le=38)):
    async with get_db() as db:
        rows = await FixtureService(db).get_difficulty_rows()
    return process_fixture_difficulty(rows, gameweek)
