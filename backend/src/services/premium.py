import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.profile import Profile
from services.payments import PaymentClient

logger = logging.getLogger(__name__)


class PremiumService:
    def __init__(self, db: AsyncSession, client: PaymentClient):
        self.db = db
        self.client = client

    async def verify_payment(self, user_id: str, session_id: str) -> dict:
        """Activate premium for ``user_id`` once its checkout session is paid."""
        profile = await self.db.scalar(select(Profile).where(Profile.user_id == user_id))
        if not profile:
            return {"error": "Profile not found.", "code": "not_found"}
        if profile.is_premium and profile.payment_session_id == session_id:
            return {"success": True, "message": "Premium status already active"}

        claimed = await self.db.scalar(
            select(Profile).where(Profile.payment_session_id == session_id)
        )
        if claimed and claimed.user_id != user_id:
            return {"error": "Payment not completed or invalid session.", "code": "payment_invalid"}

        session = await self.client.get_checkout_session(session_id) or {}
        if session.get("payment_status") != "paid" or session.get("user_id") != user_id:
            logger.warning(
                "Payment verification rejected: user=%s session=%s status=%s",
                user_id, session_id, session.get("payment_status"),
            )
            return {"error": "Payment not completed or invalid session.", "code": "payment_invalid"}

        profile.is_premium = True
        profile.premium_activated_at = datetime.now(timezone.utc)
        profile.upgraded_by_admin = False
        profile.payment_session_id = session_id
        await self.db.flush()

        logger.info("Premium activated for user %s", user_id)
        return {"success": True, "message": "Premium status activated successfully"}
