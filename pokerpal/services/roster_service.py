"""Roster management: who is in the group's regular game."""

from loguru import logger
from sqlmodel import Session

from pokerpal.core.exceptions import (
    ConflictError,
    MissingRequiredFieldError,
    NotFoundError,
)
from pokerpal.dao.roster_dao import (
    create_roster_player,
    delete_roster_player,
    get_roster_names,
    get_roster_player_by_name,
    next_position,
)
from pokerpal.models import RosterPlayer

MAX_ROSTER_SIZE = 10


def add_player(session: Session, name: str) -> list[str]:
    """Append a player to the roster and return the new roster.

    Raises:
        MissingRequiredFieldError: name is blank
        ConflictError: player already exists or the roster is full
    """
    name = name.strip()
    if not name:
        raise MissingRequiredFieldError(
            message="Player name cannot be empty", details={"field": "name"}
        )

    roster = get_roster_names(session)
    if name in roster:
        raise ConflictError(
            code="player_exists",
            message="This player already exists",
            details={"field": "name", "value": name},
        )
    if len(roster) >= MAX_ROSTER_SIZE:
        raise ConflictError(
            code="roster_full",
            message=f"You cannot add more than {MAX_ROSTER_SIZE} players",
            details={"max_players": MAX_ROSTER_SIZE},
        )

    create_roster_player(
        session, RosterPlayer(name=name, position=next_position(session))
    )
    session.commit()
    logger.info(f"Player added to roster: {name}")
    return [*roster, name]


def remove_player(session: Session, name: str) -> list[str]:
    """Take a player off the roster. Their past sessions are left untouched.

    Raises:
        NotFoundError: player is not on the roster
        ConflictError: player is the last one left
    """
    player = get_roster_player_by_name(session, name)
    if player is None:
        raise NotFoundError(
            message=f"Player {name} is not on the roster", details={"name": name}
        )

    roster = get_roster_names(session)
    if len(roster) <= 1:
        raise ConflictError(
            code="roster_empty",
            message="You must have at least one player in the game",
        )

    delete_roster_player(session, player)
    session.commit()
    logger.info(f"Player removed from roster: {name}")
    return [other for other in roster if other != name]
