import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.analytics import get_pick_recommendations, win_probabilities_from_rows
from models.gameweek import Fixture
from models.pick import Pick
from models.team import Team
from services.fixtures import FixtureService
from services.gameweeks import get_current_gameweek

logger = logging.getLogger(__name__)


class PickService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit_pick(self, user_id: str, fixture_id: uuid.UUID, team_id: uuid.UUID) -> dict:
        gameweek = await get_current_gameweek(self.db)
        if not gameweek:
            return {"error": "There is no open gameweek.", "code": "no_gameweek"}
        if gameweek.deadline <= datetime.now(timezone.utc):
            return {
                "error": f"The deadline for gameweek {gameweek.number} has passed.",
                "code": "deadline_passed",
            }

        fixture = await self.db.scalar(select(Fixture).where(Fixture.id == fixture_id))
        if not fixture or fixture.gameweek_id != gameweek.id:
            return {"error": "Fixture not found in the current gameweek.", "code": "not_found"}
        if not fixture.involves(team_id):
            return {"error": "That team is not playing in this fixture.", "code": "invalid_team"}

        if await self._pick_for_gameweek(user_id, gameweek.id):
            return {
                "error": "You've already made a pick for this gameweek.",
                "code": "already_picked",
            }

        used = await self.get_team_used_count(user_id, team_id)
        if used >= settings.MAX_TEAM_USES:
            return {
                "error": f"You've already used this team {settings.MAX_TEAM_USES} times this season.",
                "code": "team_exhausted",
            }

        pick = Pick(
            user_id=user_id,
            gameweek_id=gameweek.id,
            fixture_id=fixture.id,
            picked_team_id=team_id,
        )
        self.db.add(pick)
        await self.db.flush()
        logger.info("Pick saved: user=%s gameweek=%s team=%s", user_id, gameweek.number, team_id)
        return {"success": True, "pick": pick}

    async def undo_pick(self, user_id: str) -> dict:
        gameweek = await get_current_gameweek(self.db)
        if not gameweek:
            return {"error": "There is no open gameweek.", "code": "no_gameweek"}

        pick = await self._pick_for_gameweek(user_id, gameweek.id)
        if not pick:
            return {"error": "You haven't made a pick for this gameweek yet.", "code": "not_found"}

        first_kickoff = await self.db.scalar(
            select(func.min(Fixture.kickoff_time)).where(Fixture.gameweek_id == gameweek.id)
        )
        if first_kickoff and first_kickoff <= datetime.now(timezone.utc):
            return {
                "error": "You can only undo your pick before the first match starts.",
                "code": "locked",
            }

        await self.db.delete(pick)
        await self.db.flush()
        logger.info("Pick undone: user=%s gameweek=%s", user_id, gameweek.number)
        return {"success": True}

    async def get_team_used_count(self, user_id: str, team_id: uuid.UUID) -> int:
        count = await self.db.scalar(
            select(func.count(Pick.id)).where(
                Pick.user_id == user_id,
                Pick.picked_team_id == team_id,
            )
        )
        return count or 0

    async def get_team_usage(self, user_id: str) -> dict[uuid.UUID, int]:
        result = await self.db.execute(
            select(Pick.picked_team_id, func.count(Pick.id))
            .where(Pick.user_id == user_id)
            .group_by(Pick.picked_team_id)
        )
        return {team_id: count for team_id, count in result.all()}

    async def get_recommendations(self, user_id: str) -> dict:
        """Easiest current-gameweek fixtures among teams the user can still pick."""
        gameweek = await get_current_gameweek(self.db)
        if not gameweek:
            return {"error": "There is no open gameweek.", "code": "no_gameweek"}

        teams_result = await self.db.execute(select(Team))
        teams = teams_result.scalars().all()
        usage = await self.get_team_usage(user_id)
        remaining = {
            team.name: max(settings.MAX_TEAM_USES - usage.get(team.id, 0), 0) for team in teams
        }

        rows = await FixtureService(self.db).get_difficulty_rows()
        recommendations = get_pick_recommendations(
            win_probabilities_from_rows(rows), remaining, gameweek.number
        )
        return {"success": True, "gameweek": gameweek.number, "recommendations": recommendations}

    async def get_current_pick(self, user_id: str) -> Pick | None:
        gameweek = await get_current_gameweek(self.db)
        if not gameweek:
            return None
        return await self._pick_for_gameweek(user_id, gameweek.id)

    async def list_picks(self, user_id: str) -> list[Pick]:
        result = await self.db.execute(
            select(Pick).where(Pick.user_id == user_id).order_by(Pick.created_at.asc())
        )
        return list(result.scalars().all())

    async def _pick_for_gameweek(self, user_id: str, gameweek_id: uuid.UUID) -> Pick | None:
        return await self.db.scalar(
            select(Pick).where(Pick.user_id == user_id, Pick.gameweek_id == gameweek_id)
        )
