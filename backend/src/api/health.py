import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    body = {"app": "ok", "db": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
    try:
        async with get_db() as db:
            await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check - DB error: %s", e)
        body.update(db="error", error=str(e))
        return JSONResponse(status_code=500, content=body)
    return body
