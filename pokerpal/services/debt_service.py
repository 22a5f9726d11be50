"""Debt book: manual debts and marking debts as paid."""

from loguru import logger
from sqlmodel import Session

from pokerpal.core.exceptions import ConflictError, NotFoundError
from pokerpal.dao.debt_dao import create_debt, get_debt_by_id, get_debts, update_debt
from pokerpal.dao.roster_dao import get_roster_names
from pokerpal.dao.session_dao import get_player_names_in_history
from pokerpal.models import Debt, utcnow
from pokerpal.services.ledger_validator import validate_debt


def list_debts(session: Session, settled: bool | None = None) -> list[Debt]:
    """Debts newest first; pass ``settled`` to get only active or only paid ones."""
    return get_debts(session, settled=settled)


def add_manual_debt(
    session: Session,
    from_player: str,
    to_player: str,
    amount: float,
    description: str = "",
) -> Debt:
    """Record a debt typed in by hand.

    Raises:
        MissingRequiredFieldError: a player name is blank
        UnknownPlayerError: a name is neither on the roster nor in any session
        SelfDebtError: from_player and to_player are the same
        InvalidDebtAmountError: amount is not positive
    """
    known_players = {*get_roster_names(session), *get_player_names_in_history(session)}
    validate_debt(from_player, to_player, amount, known_players)

    debt = create_debt(
        session,
        Debt(
            from_player=from_player,
            to_player=to_player,
            amount=amount,
            description=description.strip(),
        ),
    )
    session.commit()
    session.refresh(debt)
    logger.info(f"Manual debt recorded: {from_player} owes {to_player} {amount:.2f}")
    return debt


def settle_debt(session: Session, debt_id: int) -> Debt:
    """Mark a debt as paid. This cannot be undone.

    Raises:
        NotFoundError: no debt with this ID
        ConflictError: the debt is already settled
    """
    debt = get_debt_by_id(session, debt_id)
    if debt is None:
        raise NotFoundError(
            message=f"Debt {debt_id} not found", details={"debt_id": debt_id}
        )
    if debt.settled:
        raise ConflictError(
            code="debt_settled",
            message="This debt has already been settled",
            details={"debt_id": debt_id},
        )

    debt.settled = True
    debt.settled_date = utcnow()
    update_debt(session, debt)
    session.commit()
    session.refresh(debt)
    logger.info(
        f"Debt {debt_id} settled: {debt.from_player} paid {debt.to_player} "
        + f"{debt.amount:.2f}"
    )
    return debt
