from fastapi import APIRouter, status
from loguru import logger

from pokerpal.api.deps import SessionDep
from pokerpal.models import Debt
from pokerpal.schemas.errors import CONFLICT, NOT_FOUND, UNPROCESSABLE
from pokerpal.schemas.schemas import DebtCreate
from pokerpal.services.debt_service import add_manual_debt, list_debts, settle_debt

router = APIRouter()


@router.get("/", response_model=list[Debt])
def read_debts(session: SessionDep, settled: bool | None = None) -> list[Debt]:
    """Debts newest first; ``?settled=false`` for the active ones."""
    debts = list_debts(session, settled=settled)
    logger.debug(f"Retrieved {len(debts)} debts (settled={settled})")
    return debts


@router.post(
    "/",
    response_model=Debt,
    status_code=status.HTTP_201_CREATED,
    responses=UNPROCESSABLE,
)
def create_debt(body: DebtCreate, session: SessionDep) -> Debt:
    """Record a debt entered by hand."""
    logger.info(f"Recording manual debt {body.from_player} -> {body.to_player}")
    return add_manual_debt(
        session, body.from_player, body.to_player, body.amount, body.description
    )


@router.post(
    "/{debt_id}/settle", response_model=Debt, responses={**NOT_FOUND, **CONFLICT}
)
def mark_debt_settled(debt_id: int, session: SessionDep) -> Debt:
    """Mark a debt as paid. Cannot be undone."""
    logger.info(f"Settling debt {debt_id}")
    return settle_debt(session, debt_id)
