from fastapi import APIRouter
from loguru import logger

from pokerpal.api.v1.endpoints import debts, leaderboard, roster, sessions

logger.info("Initializing API v1 router")
api_router = APIRouter(prefix="/api/v1")

logger.debug("Registering roster endpoint")
api_router.include_router(roster.router, prefix="/roster", tags=["roster"])
logger.debug("Registering sessions endpoint")
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
logger.debug("Registering debts endpoint")
api_router.include_router(debts.router, prefix="/debts", tags=["debts"])
logger.debug("Registering leaderboard endpoint")
api_router.include_router(
    leaderboard.router, prefix="/leaderboard", tags=["leaderboard"]
)
logger.success("API v1 router initialized successfully")
