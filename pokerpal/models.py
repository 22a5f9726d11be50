"""SQLModel data models for the PokerPal ledger service."""

import datetime as dt
from typing import Optional

from sqlmodel import Field, Relationship, SQLModel  # type: ignore


def utcnow() -> dt.datetime:
    """Current time in UTC."""
    return dt.datetime.now(dt.UTC)


class RosterPlayer(SQLModel, table=True):
    """A member of the group's current roster."""

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    position: int = Field(default=0, description="Display order within the roster")


class PokerSession(SQLModel, table=True):
    """A single recorded poker session."""

    id: int | None = Field(default=None, primary_key=True)
    date: dt.date = Field(index=True)
    location: str
    added_by: str
    # Legacy sessions never tracked buy-ins
    buy_in_amount: float | None = None
    total_pot: float = 0.0
    settled: bool = False
    created_at: dt.datetime = Field(default_factory=utcnow, index=True)

    # Relationships
    entries: list["SessionEntry"] = Relationship(  # type: ignore
        back_populates="poker_session",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "SessionEntry.position",
        },
    )
    debts: list["Debt"] = Relationship(  # type: ignore
        back_populates="poker_session",
        sa_relationship_kwargs={"cascade": "all, delete"},
    )


class SessionEntry(SQLModel, table=True):
    """One roster member's line in a session ledger."""

    id: int | None = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="pokersession.id", index=True)

    # Stored by name so removed roster members stay in history
    player_name: str
    result: float = 0.0
    buy_ins: int | None = Field(default=0, description="None for legacy records")
    position: int = 0

    poker_session: PokerSession = Relationship(back_populates="entries")  # type: ignore


class Debt(SQLModel, table=True):
    """Money one player owes another, manual or from a session settlement."""

    id: int | None = Field(default=None, primary_key=True)
    from_player: str = Field(index=True)
    to_player: str = Field(index=True)
    amount: float
    description: str = ""
    settled: bool = False
    date: dt.datetime = Field(default_factory=utcnow, index=True)
    settled_date: dt.datetime | None = None

    # Backlink for debts created by settling a session
    session_id: int | None = Field(default=None, foreign_key="pokersession.id")
    session_date: dt.date | None = None

    poker_session: Optional["PokerSession"] = Relationship(back_populates="debts")  # type: ignore  # noqa: UP037, UP045
