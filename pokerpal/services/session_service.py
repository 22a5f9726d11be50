"""Session workflows: record, edit, delete and settle poker sessions."""

from collections.abc import Sequence

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from pokerpal.core.exceptions import (
    ConflictError,
    NotFoundError,
    SettlementError,
    UnknownPlayerError,
)
from pokerpal.dao import session_dao
from pokerpal.dao.debt_dao import create_debt, get_debts_for_session
from pokerpal.dao.roster_dao import get_roster_names
from pokerpal.models import Debt, PokerSession, SessionEntry
from pokerpal.schemas.ledger import (
    PlayerEntry,
    SessionCheck,
    SessionDraft,
    SessionRecord,
    Transaction,
)
from pokerpal.services.ledger_validator import (
    check_session,
    clamp_non_participants,
    compute_total_pot,
    validate_session,
)
from pokerpal.services.settlement_planner import plan_settlement


def to_record(poker_session: PokerSession) -> SessionRecord:
    """Convert a stored session into a plain value for the core services."""
    return SessionRecord(
        id=poker_session.id,
        date=poker_session.date,
        location=poker_session.location,
        added_by=poker_session.added_by,
        buy_in_amount=poker_session.buy_in_amount,
        total_pot=poker_session.total_pot,
        settled=poker_session.settled,
        created_at=poker_session.created_at,
        players=[
            PlayerEntry(name=e.player_name, result=e.result, buy_ins=e.buy_ins)
            for e in poker_session.entries
        ],
    )


def _fill_players(
    names: Sequence[str], supplied: Sequence[PlayerEntry]
) -> list[PlayerEntry]:
    """One entry per name, in order; names not supplied sat out."""
    by_name = {entry.name: entry for entry in supplied}
    return clamp_non_participants(
        by_name.get(name) or PlayerEntry(name=name) for name in names
    )


def _get_poker_session(session: Session, session_id: int) -> PokerSession:
    poker_session = session_dao.get_session_by_id(session, session_id)
    if poker_session is None:
        raise NotFoundError(
            message=f"Session {session_id} not found",
            details={"session_id": session_id},
        )
    return poker_session


def check_draft(session: Session, draft: SessionDraft) -> SessionCheck:
    """Live balance feedback for a session that is still being entered."""
    return check_session(draft, get_roster_names(session))


def list_sessions(session: Session) -> list[SessionRecord]:
    """All sessions, newest first."""
    return [to_record(s) for s in session_dao.get_all_sessions(session)]


def get_session_record(session: Session, session_id: int) -> SessionRecord:
    """A single session.

    Raises:
        NotFoundError: no session with this ID
    """
    return to_record(_get_poker_session(session, session_id))


def create_session(session: Session, draft: SessionDraft) -> SessionRecord:
    """Validate and record a new session.

    The session gets one entry per current roster member; members missing from
    the draft are recorded as having sat out.

    Raises:
        ValidationError: any ledger validation failure (see validate_session)
    """
    roster = get_roster_names(session)
    validate_session(draft, roster)

    players = _fill_players(roster, draft.players)
    if draft.date is None:
        msg = "Validated session draft should have a date"
        raise ValueError(msg)
    poker_session = PokerSession(
        date=draft.date,
        location=draft.location.strip(),
        added_by=draft.added_by,
        buy_in_amount=draft.buy_in_amount,
        total_pot=compute_total_pot(draft.buy_in_amount, players),
        entries=[
            SessionEntry(
                player_name=p.name, result=p.result, buy_ins=p.buy_ins, position=i
            )
            for i, p in enumerate(players)
        ],
    )
    session_dao.create_session(session, poker_session)
    session.commit()
    session.refresh(poker_session)

    logger.info(
        f"Recorded session {poker_session.id} on {poker_session.date} at "
        + f"{poker_session.location} (pot {poker_session.total_pot:.2f})"
    )
    return to_record(poker_session)


def update_session(
    session: Session, session_id: int, draft: SessionDraft
) -> SessionRecord:
    """Edit a recorded session, re-validating the whole ledger.

    The set of players is fixed to the session's own entries. ``added_by`` may be
    any current roster member or any player of the session.

    Raises:
        NotFoundError: no session with this ID
        ConflictError: the session is already settled
        ValidationError: the edited ledger is invalid
    """
    poker_session = _get_poker_session(session, session_id)
    if poker_session.settled:
        raise ConflictError(
            code="session_settled",
            message="A settled session cannot be edited",
            details={"session_id": session_id},
        )

    session_players = [e.player_name for e in poker_session.entries]
    allowed = [
        *session_players,
        *(n for n in get_roster_names(session) if n not in session_players),
    ]
    for entry in draft.players:
        if entry.name not in session_players:
            raise UnknownPlayerError(
                message=f"{entry.name} did not play in this session",
                details={"field": entry.name},
            )
    validate_session(draft, allowed)

    players = _fill_players(session_players, draft.players)
    if draft.date is None:
        msg = "Validated session draft should have a date"
        raise ValueError(msg)
    poker_session.date = draft.date
    poker_session.location = draft.location.strip()
    poker_session.added_by = draft.added_by
    poker_session.buy_in_amount = draft.buy_in_amount
    poker_session.total_pot = compute_total_pot(draft.buy_in_amount, players)
    for row, player in zip(poker_session.entries, players, strict=True):
        row.result = player.result
        row.buy_ins = player.buy_ins

    session_dao.update_session(session, poker_session)
    session.commit()
    session.refresh(poker_session)
    logger.info(f"Updated session {session_id}")
    return to_record(poker_session)


def delete_session(session: Session, session_id: int) -> None:
    """Delete a session together with every debt created by settling it.

    Raises:
        NotFoundError: no session with this ID
    """
    poker_session = _get_poker_session(session, session_id)
    debt_count = len(get_debts_for_session(session, session_id))
    session_dao.delete_session(session, poker_session)
    session.commit()
    logger.info(f"Deleted session {session_id} and {debt_count} linked debt(s)")


def preview_settlement(session: Session, session_id: int) -> list[Transaction]:
    """Payments that settling this session would create, without writing them.

    Raises:
        NotFoundError: no session with this ID
    """
    record = get_session_record(session, session_id)
    return plan_settlement(record.players)


def settle_session(session: Session, session_id: int) -> list[Debt]:
    """Record the settlement debts for a session and mark it settled.

    Debts and the settled flag are committed together; on failure nothing is
    written.

    Raises:
        NotFoundError: no session with this ID
        ConflictError: the session is already settled
        SettlementError: the database rejected the write
    """
    poker_session = _get_poker_session(session, session_id)
    if poker_session.settled:
        raise ConflictError(
            code="session_settled",
            message="This session has already been settled",
            details={"session_id": session_id},
        )

    transactions = plan_settlement(to_record(poker_session).players)
    description = (
        f"Settlement for {poker_session.date.isoformat()} at {poker_session.location}"
    )

    try:
        debts = [
            create_debt(
                session,
                Debt(
                    from_player=tx.from_player,
                    to_player=tx.to_player,
                    amount=tx.amount,
                    description=description,
                    session_id=session_id,
                    session_date=poker_session.date,
                ),
            )
            for tx in transactions
        ]
        poker_session.settled = True
        session_dao.update_session(session, poker_session)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Settlement of session {session_id} failed: {e!s}")
        raise SettlementError(details={"session_id": session_id}) from e

    for debt in debts:
        session.refresh(debt)
    logger.success(f"Settled session {session_id} with {len(debts)} debt(s)")
    return debts
