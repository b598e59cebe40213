import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.profile import Profile

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def upgrade_user(self, email: str) -> dict:
        profile = await self.db.scalar(select(Profile).where(Profile.email == email))
        if not profile:
            return {
                "error": f"User with email {email} not found. Please verify the email address is correct.",
                "code": "not_found",
            }

        profile.is_premium = True
        profile.premium_activated_at = datetime.now(timezone.utc)
        profile.upgraded_by_admin = True
        await self.db.flush()

        logger.info("Premium activated for %s (%s) by admin", email, profile.user_id)
        return {
            "success": True,
            "message": f"Premium status activated successfully for {email}",
            "user_id": profile.user_id,
        }
