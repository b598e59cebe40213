import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from api.admin import router as admin_router
from api.health import router as health_router
from api.leagues import router as leagues_router
from api.picks import router as picks_router
from api.premium import router as premium_router
from api.standings import router as standings_router
from config import settings
from core.database import engine
from core.limiters import build_rate_limiters
from models import Base

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # One limiter set per process, handed to routes through get_rate_limiters
    app.state.rate_limiters = build_rate_limiters(settings)
    logger.info("%s ready", settings.APP_NAME)

    yield
    await engine.dispose()


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)

# CORS: only the gateway origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://gateway:3000"],
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["X-User-Id", "X-Admin-Secret", "Content-Type"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


app.add_middleware(SecurityHeadersMiddleware)

app.include_router(health_router)
app.include_router(picks_router)
app.include_router(leagues_router)
app.include_router(standings_router)
app.include_router(premium_router)
app.include_router(admin_router)
