"""Plain value types shared by the ledger validator, settlement planner and stats."""

import datetime as dt

from pydantic import BaseModel, Field


class PlayerEntry(BaseModel):
    """A player's line in a session: net result and number of buy-ins.

    ``buy_ins == 0`` means the player sat out. ``buy_ins is None`` marks a legacy
    record that never tracked buy-ins.
    """

    name: str
    result: float = Field(default=0.0, allow_inf_nan=False)
    buy_ins: int | None = Field(default=0, ge=0)


class DraftEntry(PlayerEntry):
    """A player line typed in for a new or edited session. Buy-ins are required."""

    buy_ins: int = Field(default=0, ge=0)  # pyright: ignore[reportIncompatibleVariableOverride]


class SessionDraft(BaseModel):
    """A session as entered by a user. Any field may still be missing."""

    date: dt.date | None = None
    location: str = ""
    added_by: str = ""
    buy_in_amount: float = Field(default=0.0, allow_inf_nan=False)
    players: list[DraftEntry] = Field(default_factory=list)


class BalanceSummary(BaseModel):
    total_wins: float = 0.0
    total_losses: float = 0.0
    balance: float = 0.0
    is_balanced: bool = True


class FieldError(BaseModel):
    """A validation failure attached to one input field."""

    code: str
    message: str
    field: str


class SessionCheck(BaseModel):
    """Live feedback for a session that is still being typed in."""

    balance: BalanceSummary
    total_pot: float = 0.0
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class Transaction(BaseModel):
    """A single planned payment from a loser to a winner."""

    from_player: str
    to_player: str
    amount: float


class SessionRecord(BaseModel):
    """A persisted session as a plain value."""

    id: int | None = None
    date: dt.date
    location: str
    added_by: str
    buy_in_amount: float | None = None
    total_pot: float | None = None
    settled: bool = False
    created_at: dt.datetime | None = None
    players: list[PlayerEntry] = Field(default_factory=list)


class PlayerStats(BaseModel):
    """Aggregate statistics for one roster member over all sessions."""

    name: str
    total_winnings: float = 0.0
    sessions_won: int = 0
    sessions_lost: int = 0
    win_rate: int = 0
    biggest_win: float = 0.0
    biggest_loss: float = 0.0
    total_sessions: int = 0
    total_buy_ins: int = 0
    average_buy_ins: float = 0.0
