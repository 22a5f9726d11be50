from typing import Annotated

from fastapi import APIRouter, Query
from loguru import logger

from pokerpal.api.deps import SessionDep
from pokerpal.schemas.schemas import LeaderboardResponse
from pokerpal.services.leaderboard_service import get_biggest_sessions, get_leaderboard
from pokerpal.services.statistics_service import COMPACT_POT_COUNT, FULL_POT_COUNT

router = APIRouter()


@router.get("/", response_model=LeaderboardResponse)
def read_leaderboard(
    session: SessionDep,
    limit: Annotated[int, Query(ge=0, le=50)] = FULL_POT_COUNT,
) -> LeaderboardResponse:
    """Ranked player stats and the ``limit`` sessions with the biggest pots."""
    logger.info("Building leaderboard")
    return LeaderboardResponse(
        players=get_leaderboard(session),
        biggest_sessions=get_biggest_sessions(session, limit),
    )


@router.get("/widget", response_model=LeaderboardResponse)
def read_leaderboard_widget(session: SessionDep) -> LeaderboardResponse:
    """Compact view: top three players and the three biggest non-empty pots."""
    return LeaderboardResponse(
        players=get_leaderboard(session)[:COMPACT_POT_COUNT],
        biggest_sessions=get_biggest_sessions(
            session, COMPACT_POT_COUNT, exclude_empty=True
        ),
    )
