"""Leaderboard assembled from the stored session history."""

from loguru import logger
from sqlmodel import Session

from pokerpal.dao.roster_dao import get_roster_names
from pokerpal.schemas.ledger import PlayerStats, SessionRecord
from pokerpal.services.session_service import list_sessions
from pokerpal.services.statistics_service import (
    FULL_POT_COUNT,
    biggest_sessions,
    build_leaderboard,
)


def get_leaderboard(session: Session) -> list[PlayerStats]:
    """Ranked stats for the current roster over every recorded session."""
    roster = get_roster_names(session)
    records = list_sessions(session)
    logger.debug(f"Building leaderboard from {len(records)} sessions")
    return build_leaderboard(records, roster)


def get_biggest_sessions(
    session: Session, limit: int = FULL_POT_COUNT, *, exclude_empty: bool = False
) -> list[SessionRecord]:
    """Sessions with the largest pots."""
    return biggest_sessions(
        list_sessions(session), limit, exclude_empty=exclude_empty
    )
