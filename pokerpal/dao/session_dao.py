"""Data Access Object for poker session operations."""

import datetime as dt

from sqlmodel import Session, col, select

from pokerpal.models import PokerSession, SessionEntry


def get_session_by_id(session: Session, session_id: int) -> PokerSession | None:
    """Get a poker session by ID."""
    return session.get(PokerSession, session_id)


def get_all_sessions(session: Session) -> list[PokerSession]:
    """Get all poker sessions, newest first."""
    statement = select(PokerSession).order_by(
        col(PokerSession.created_at).desc(), col(PokerSession.id).desc()
    )
    return list(session.exec(statement).all())


def find_session(
    session: Session, date: dt.date, location: str, added_by: str
) -> PokerSession | None:
    """Find a session by its natural key (used to skip duplicate imports)."""
    return session.exec(
        select(PokerSession).where(
            PokerSession.date == date,
            PokerSession.location == location,
            PokerSession.added_by == added_by,
        )
    ).first()


def create_session(session: Session, poker_session: PokerSession) -> PokerSession:
    """Create a poker session with its entries and return it with ID populated."""
    session.add(poker_session)
    session.flush()
    return poker_session


def update_session(session: Session, poker_session: PokerSession) -> PokerSession:
    """Update an existing poker session."""
    session.add(poker_session)
    return poker_session


def delete_session(session: Session, poker_session: PokerSession) -> None:
    """Delete a poker session; entries and debts go with it."""
    session.delete(poker_session)


def get_player_names_in_history(session: Session) -> list[str]:
    """Every distinct player name that appears in a recorded session."""
    statement = select(SessionEntry.player_name).distinct()
    return list(session.exec(statement).all())
