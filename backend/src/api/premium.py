import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user_id
from api.errors import raise_for_error
from api.schemas import PremiumVerifyIn
from core.database import get_db
from services.payments import PaymentClient
from services.premium import PremiumService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/premium", tags=["premium"])


@router.post("/verify")
async def verify_payment(body: PremiumVerifyIn, user_id: str = Depends(get_current_user_id)):
    client = PaymentClient()
    try:
        async with get_db() as db:
            result = await PremiumService(db, client).verify_payment(user_id, body.session_id.strip())
    except httpx.HTTPError as e:
        logger.error("Payment verification failed: %s", e)
        raise HTTPException(status_code=502, detail="Payment provider request failed")
    finally:
        await client.aclose()
    return raise_for_error(result)
