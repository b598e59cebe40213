import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.gameweek import Fixture, Gameweek
from services.standings import StandingsService

logger = logging.getLogger(__name__)


async def get_current_gameweek(db: AsyncSession) -> Gameweek | None:
    return await db.scalar(select(Gameweek).where(Gameweek.is_current.is_(True)))


async def get_gameweek_by_number(db: AsyncSession, number: int) -> Gameweek | None:
    return await db.scalar(select(Gameweek).where(Gameweek.number == number))


class GameweekService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def advance(self) -> dict:
        """Score the current gameweek and open the next one once every fixture is finished.

        With no current gameweek the lowest-numbered one is opened instead.
        """
        current = await get_current_gameweek(self.db)
        if not current:
            first = await self.db.scalar(select(Gameweek).order_by(Gameweek.number.asc()).limit(1))
            if not first:
                return {"error": "No gameweeks have been synced yet.", "code": "not_found"}
            first.is_current = True
            await self.db.flush()
            logger.info("Gameweek %d opened", first.number)
            return {"success": True, "previous_gameweek": None, "current_gameweek": first.number}

        unfinished = await self.db.scalar(
            select(func.count(Fixture.id)).where(
                Fixture.gameweek_id == current.id,
                Fixture.status != "finished",
            )
        )
        if unfinished:
            logger.info("Gameweek %d not complete: %d fixtures left", current.number, unfinished)
            return {
                "error": f"Gameweek {current.number} is not yet complete.",
                "code": "not_complete",
            }

        next_gameweek = await get_gameweek_by_number(self.db, current.number + 1)
        if not next_gameweek:
            return {
                "error": f"Gameweek {current.number + 1} has not been synced yet.",
                "code": "not_found",
            }

        standings = StandingsService(self.db)
        scores = await standings.calculate_gameweek_scores(current.id)
        await standings.refresh_standings()

        current.is_current = False
        next_gameweek.is_current = True
        await self.db.flush()

        logger.info("Advanced from gameweek %d to %d", current.number, next_gameweek.number)
        return {
            "success": True,
            "previous_gameweek": current.number,
            "current_gameweek": next_gameweek.number,
            "scored": scores["scored"],
        }
