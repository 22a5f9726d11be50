"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
import datetime as dt

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from pokerpal.models import PokerSession, RosterPlayer, SessionEntry
from pokerpal.schemas.ledger import DraftEntry, SessionDraft

ROSTER = ["Alice", "Bob", "Carol"]


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(test_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with Session(test_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def roster(session) -> list[str]:
    """Store a three-player roster."""
    for position, name in enumerate(ROSTER):
        session.add(RosterPlayer(name=name, position=position))
    session.commit()
    return list(ROSTER)


def _entry(name: str, result: float, buy_ins: int = 1) -> DraftEntry:
    """Shorthand for a player line."""
    return DraftEntry(name=name, result=result, buy_ins=buy_ins)


@pytest.fixture
def make_draft() -> Callable[..., SessionDraft]:
    """Build a valid-looking draft; override any field by keyword."""

    def _make(players: list[DraftEntry] | None = None, **overrides) -> SessionDraft:
        values = {
            "date": dt.date(2024, 5, 1),
            "location": "Bob's place",
            "added_by": "Alice",
            "buy_in_amount": 10.0,
            "players": players
            if players is not None
            else [_entry("Alice", 20, 2), _entry("Bob", -10), _entry("Carol", -10)],
        }
        values.update(overrides)
        return SessionDraft(**values)

    return _make


@pytest.fixture
def stored_session(session, roster) -> PokerSession:
    """A balanced, unsettled session in the database."""
    poker_session = PokerSession(
        date=dt.date(2024, 5, 1),
        location="Bob's place",
        added_by="Alice",
        buy_in_amount=10.0,
        total_pot=40.0,
        entries=[
            SessionEntry(player_name="Alice", result=20.0, buy_ins=2, position=0),
            SessionEntry(player_name="Bob", result=-10.0, buy_ins=1, position=1),
            SessionEntry(player_name="Carol", result=-10.0, buy_ins=1, position=2),
        ],
    )
    session.add(poker_session)
    session.commit()
    session.refresh(poker_session)
    return poker_session
