"""Import a group's history from a JSON export.

One document per group, with sessions nested under it::

    {
      "playerNames": ["Alice", "Bob"],
      "sessions": [
        {"date": "2024-05-01", "location": "Bob's", "addedBy": "Alice",
         "buyInAmount": 10, "settled": false,
         "players": {"Alice": {"result": 15, "buyIns": 1}, "Bob": -15}}
      ]
    }

Older session documents map each player straight to a number; those never
tracked buy-ins and are stored as legacy entries.
"""

from dataclasses import dataclass
import datetime as dt
from enum import Enum
import json
import math
from pathlib import Path
from typing import TypedDict, cast

from loguru import logger
from sqlmodel import Session

from pokerpal.core.exceptions import ConflictError
from pokerpal.dao import session_dao
from pokerpal.dao.roster_dao import get_roster_names
from pokerpal.models import PokerSession, SessionEntry
from pokerpal.schemas.ledger import PlayerEntry
from pokerpal.services.ledger_validator import (
    clamp_non_participants,
    compute_balance,
    compute_total_pot,
    participants,
)
from pokerpal.services.roster_service import add_player


class ImportResult(Enum):
    """Result of importing a single session document."""

    SUCCESS = "success"
    SESSION_EXISTS = "session_exists"
    INVALID = "invalid"


class PlayerResultData(TypedDict, total=False):
    result: float
    buyIns: int | None


class SessionBackupData(TypedDict, total=False):
    """Structure of a session document in the backup JSON file."""

    date: str
    location: str
    addedBy: str
    buyInAmount: float | None
    settled: bool
    players: dict[str, float | PlayerResultData]


class BackupData(TypedDict, total=False):
    playerNames: list[str]
    sessions: list[SessionBackupData]


@dataclass
class ImportSummary:
    players_added: int = 0
    players_skipped: int = 0
    sessions_imported: int = 0
    sessions_skipped: int = 0
    sessions_invalid: int = 0


def _parse_players(raw: dict[str, float | PlayerResultData]) -> list[PlayerEntry]:
    """Turn a players mapping into ordered entries, legacy numbers included."""
    entries: list[PlayerEntry] = []
    for name, value in raw.items():
        if isinstance(value, int | float):
            entries.append(PlayerEntry(name=name, result=float(value), buy_ins=None))
        else:
            entries.append(
                PlayerEntry(
                    name=name,
                    result=float(value.get("result") or 0.0),
                    buy_ins=value.get("buyIns"),
                )
            )
    return entries


def import_session(session: Session, data: SessionBackupData) -> ImportResult:
    """Import one session document. Does not commit."""
    try:
        date = dt.date.fromisoformat(data.get("date", ""))
    except ValueError:
        logger.error(f"Skipping session with invalid date: {data.get('date')!r}")
        return ImportResult.INVALID

    location = data.get("location", "").strip()
    added_by = data.get("addedBy", "")
    if not location or not added_by:
        logger.error(f"Skipping session on {date}: missing location or addedBy")
        return ImportResult.INVALID

    if session_dao.find_session(session, date, location, added_by):
        logger.info(f"Session on {date} at {location} already exists, skipping...")
        return ImportResult.SESSION_EXISTS

    try:
        players = clamp_non_participants(_parse_players(data.get("players", {})))
    except ValueError as e:
        logger.error(f"Skipping session on {date}: bad player data: {e}")
        return ImportResult.INVALID
    playing = participants(players)
    balance = compute_balance(players)
    if not playing or not balance.is_balanced:
        logger.error(
            f"Abandoning session on {date} at {location}: "
            + f"balance {balance.balance:.2f}, {len(playing)} participants"
        )
        return ImportResult.INVALID

    buy_in_amount = data.get("buyInAmount")
    if buy_in_amount is not None and not math.isfinite(buy_in_amount):
        logger.error(f"Skipping session on {date}: bad buyInAmount {buy_in_amount}")
        return ImportResult.INVALID
    poker_session = PokerSession(
        date=date,
        location=location,
        added_by=added_by,
        buy_in_amount=buy_in_amount,
        total_pot=compute_total_pot(buy_in_amount, players),
        settled=bool(data.get("settled", False)),
        entries=[
            SessionEntry(
                player_name=p.name, result=p.result, buy_ins=p.buy_ins, position=i
            )
            for i, p in enumerate(players)
        ],
    )
    session_dao.create_session(session, poker_session)
    logger.debug(f"Imported session on {date} at {location}")
    return ImportResult.SUCCESS


def import_backup(session: Session, backup_file: str | Path) -> ImportSummary:
    """Add roster players and sessions from a backup file, skipping existing ones."""
    with Path(backup_file).open("r", encoding="utf-8") as f:
        backup_data = cast("BackupData", json.load(f))

    summary = ImportSummary()

    existing = set(get_roster_names(session))
    for name in backup_data.get("playerNames", []):
        if name in existing:
            summary.players_skipped += 1
            continue
        try:
            add_player(session, name)
        except ConflictError as e:
            logger.warning(f"Could not add {name} to roster: {e.message}")
            summary.players_skipped += 1
            continue
        existing.add(name)
        summary.players_added += 1

    for session_data in backup_data.get("sessions", []):
        result = import_session(session, session_data)
        if result == ImportResult.SUCCESS:
            summary.sessions_imported += 1
        elif result == ImportResult.SESSION_EXISTS:
            summary.sessions_skipped += 1
        else:
            summary.sessions_invalid += 1
    session.commit()

    logger.success(
        f"Added {summary.players_added} players, imported "
        + f"{summary.sessions_imported} sessions "
        + f"({summary.sessions_skipped} existing, {summary.sessions_invalid} invalid)"
    )
    return summary
