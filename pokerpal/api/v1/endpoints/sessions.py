"""
Sessions API endpoints.

Recording, editing and deleting poker sessions, live ledger checks while a
session is being typed in, and settling a session into debts.
"""

from fastapi import APIRouter, Response, status
from loguru import logger

from pokerpal.api.deps import SessionDep
from pokerpal.models import Debt
from pokerpal.schemas.errors import CONFLICT, NOT_FOUND, UNPROCESSABLE
from pokerpal.schemas.ledger import (
    SessionCheck,
    SessionDraft,
    SessionRecord,
    Transaction,
)
from pokerpal.services import session_service

router = APIRouter()


@router.post("/check", response_model=SessionCheck)
def check_session_draft(draft: SessionDraft, session: SessionDep) -> SessionCheck:
    """Running totals and field errors for a session still being entered.

    Always answers 200; problems are listed in ``errors``.
    """
    return session_service.check_draft(session, draft)


@router.get("/", response_model=list[SessionRecord])
def read_sessions(session: SessionDep) -> list[SessionRecord]:
    """All recorded sessions, newest first."""
    records = session_service.list_sessions(session)
    logger.debug(f"Retrieved {len(records)} sessions")
    return records


@router.post(
    "/",
    response_model=SessionRecord,
    status_code=status.HTTP_201_CREATED,
    responses=UNPROCESSABLE,
)
def create_session(draft: SessionDraft, session: SessionDep) -> SessionRecord:
    """Validate and record a new session."""
    logger.info(f"Recording session on {draft.date} at {draft.location!r}")
    return session_service.create_session(session, draft)


@router.get("/{session_id}", response_model=SessionRecord, responses=NOT_FOUND)
def read_session(session_id: int, session: SessionDep) -> SessionRecord:
    return session_service.get_session_record(session, session_id)


@router.put(
    "/{session_id}",
    response_model=SessionRecord,
    responses={**NOT_FOUND, **CONFLICT, **UNPROCESSABLE},
)
def update_session(
    session_id: int, draft: SessionDraft, session: SessionDep
) -> SessionRecord:
    """Edit a session that has not been settled yet."""
    logger.info(f"Updating session {session_id}")
    return session_service.update_session(session, session_id, draft)


@router.delete(
    "/{session_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND
)
def delete_session(session_id: int, session: SessionDep) -> Response:
    """Delete a session and every debt created by settling it."""
    logger.info(f"Deleting session {session_id}")
    session_service.delete_session(session, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{session_id}/settlement", response_model=list[Transaction], responses=NOT_FOUND
)
def read_settlement_plan(session_id: int, session: SessionDep) -> list[Transaction]:
    """Payments that settling this session would record."""
    return session_service.preview_settlement(session, session_id)


@router.post(
    "/{session_id}/settle",
    response_model=list[Debt],
    responses={**NOT_FOUND, **CONFLICT},
)
def settle_session(session_id: int, session: SessionDep) -> list[Debt]:
    """Record the settlement debts and mark the session settled, all or nothing."""
    logger.info(f"Settling session {session_id}")
    return session_service.settle_session(session, session_id)
