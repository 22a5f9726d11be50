"""Data Access Object for roster operations."""

from sqlmodel import Session, col, func, select

from pokerpal.models import RosterPlayer


def get_roster(session: Session) -> list[RosterPlayer]:
    """Get all roster players in display order."""
    statement = select(RosterPlayer).order_by(
        col(RosterPlayer.position), col(RosterPlayer.id)
    )
    return list(session.exec(statement).all())


def get_roster_names(session: Session) -> list[str]:
    """Get roster player names in display order."""
    return [player.name for player in get_roster(session)]


def get_roster_player_by_name(session: Session, name: str) -> RosterPlayer | None:
    """Get a roster player by name."""
    return session.exec(select(RosterPlayer).where(RosterPlayer.name == name)).first()


def next_position(session: Session) -> int:
    """Position for a player appended to the end of the roster."""
    highest = session.exec(select(func.max(RosterPlayer.position))).one()
    return 0 if highest is None else highest + 1


def create_roster_player(session: Session, player: RosterPlayer) -> RosterPlayer:
    """Create a roster player and return it with ID populated."""
    session.add(player)
    session.flush()
    return player


def delete_roster_player(session: Session, player: RosterPlayer) -> None:
    """Remove a player from the roster."""
    session.delete(player)
