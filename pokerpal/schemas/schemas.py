"""Pydantic request/response schemas for API endpoints."""

from pydantic import BaseModel, Field

from pokerpal.schemas.ledger import PlayerStats, SessionRecord


class PlayerCreate(BaseModel):
    """Request body for adding a roster player."""

    name: str


class RosterResponse(BaseModel):
    players: list[str]
    max_players: int


class DebtCreate(BaseModel):
    """Request body for a manually entered debt."""

    from_player: str
    to_player: str
    amount: float = Field(allow_inf_nan=False)
    description: str = ""


class LeaderboardResponse(BaseModel):
    """Ranked player stats plus the sessions with the biggest pots."""

    players: list[PlayerStats]
    biggest_sessions: list[SessionRecord] = Field(default_factory=list)
