import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.sanitization import (
    generate_invite_code,
    normalize_invite_code,
    sanitize_input,
    sanitize_league_name,
    validate_invite_code,
    validate_league_name,
)
from models.league import League, LeagueMember

logger = logging.getLogger(__name__)

INVITE_CODE_ATTEMPTS = 5


class LeagueService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_user_leagues(self, user_id: str) -> int:
        count = await self.db.scalar(
            select(func.count(League.id)).where(League.creator_id == user_id)
        )
        return count or 0

    async def create_league(
        self,
        user_id: str,
        name: str,
        description: str | None = None,
        is_public: bool = False,
        max_members: int | None = None,
    ) -> dict:
        if await self.count_user_leagues(user_id) >= settings.MAX_LEAGUES_PER_USER:
            return {
                "error": (
                    f"You can only create up to {settings.MAX_LEAGUES_PER_USER} leagues. "
                    "Please delete an existing league to create a new one."
                ),
                "code": "league_limit",
            }

        clean_name = sanitize_league_name(name)
        error = validate_league_name(clean_name)
        if error:
            return {"error": error, "code": "invalid"}

        invite_code = await self._unique_invite_code()
        if not invite_code:
            return {"error": "Could not allocate an invite code. Please try again.", "code": "conflict"}

        league = League(
            name=clean_name,
            description=sanitize_input(description) or None,
            invite_code=invite_code,
            creator_id=user_id,
            is_public=is_public,
            max_members=max_members,
        )
        self.db.add(league)
        await self.db.flush()

        self.db.add(LeagueMember(league_id=league.id, user_id=user_id))
        await self.db.flush()

        logger.info("League created: %s (%s) by %s", league.name, invite_code, user_id)
        return {"success": True, "league": league}

    async def join_league(self, user_id: str, invite_code: str) -> dict:
        code = normalize_invite_code(invite_code)
        error = validate_invite_code(code)
        if error:
            return {"error": error, "code": "invalid"}

        league = await self.db.scalar(select(League).where(League.invite_code == code))
        if not league:
            return {
                "error": f'No league found with invite code "{code}".',
                "code": "not_found",
            }

        existing = await self._membership(league.id, user_id)
        if existing:
            return {"error": "You're already a member of this league.", "code": "already_member"}

        if league.max_members:
            count = await self.db.scalar(
                select(func.count(LeagueMember.id)).where(LeagueMember.league_id == league.id)
            )
            if (count or 0) >= league.max_members:
                return {
                    "error": "This league has reached its maximum number of members.",
                    "code": "league_full",
                }

        self.db.add(LeagueMember(league_id=league.id, user_id=user_id))
        await self.db.flush()
        logger.info("User %s joined league %s", user_id, league.name)
        return {"success": True, "league": league}

    async def leave_league(self, user_id: str, league_id: uuid.UUID) -> dict:
        league = await self.db.scalar(select(League).where(League.id == league_id))
        if not league:
            return {"error": "League not found.", "code": "not_found"}
        if league.creator_id == user_id:
            return {"error": "League creators cannot leave their own league.", "code": "forbidden"}

        membership = await self._membership(league_id, user_id)
        if not membership:
            return {"error": "You're not a member of this league.", "code": "not_found"}

        await self.db.delete(membership)
        await self.db.flush()
        return {"success": True}

    async def get_user_leagues(self, user_id: str) -> list[League]:
        result = await self.db.execute(
            select(League)
            .join(LeagueMember, LeagueMember.league_id == League.id)
            .where(LeagueMember.user_id == user_id)
            .order_by(League.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_members(self, league_id: uuid.UUID) -> list[LeagueMember]:
        result = await self.db.execute(
            select(LeagueMember)
            .where(LeagueMember.league_id == league_id)
            .order_by(LeagueMember.created_at.asc())
        )
        return list(result.scalars().all())

    async def _membership(self, league_id: uuid.UUID, user_id: str) -> LeagueMember | None:
        return await self.db.scalar(
            select(LeagueMember).where(
                LeagueMember.league_id == league_id,
                LeagueMember.user_id == user_id,
            )
        )

    async def _unique_invite_code(self) -> str | None:
        for _ in range(INVITE_CODE_ATTEMPTS):
            code = generate_invite_code()
            taken = await self.db.scalar(select(League.id).where(League.invite_code == code))
            if not taken:
                return code
        return None
