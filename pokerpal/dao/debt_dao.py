"""Data Access Object for debt operations."""

from sqlmodel import Session, col, select

from pokerpal.models import Debt


def get_debt_by_id(session: Session, debt_id: int) -> Debt | None:
    """Get a debt by ID."""
    return session.get(Debt, debt_id)


def get_debts(session: Session, settled: bool | None = None) -> list[Debt]:
    """Get debts newest first, optionally filtered by settled state."""
    statement = select(Debt)
    if settled is not None:
        statement = statement.where(Debt.settled == settled)
    statement = statement.order_by(col(Debt.date).desc(), col(Debt.id).desc())
    return list(session.exec(statement).all())


def get_debts_for_session(session: Session, session_id: int) -> list[Debt]:
    """Get all debts created by settling a given session."""
    return list(session.exec(select(Debt).where(Debt.session_id == session_id)).all())


def create_debt(session: Session, debt: Debt) -> Debt:
    """Create a new debt."""
    session.add(debt)
    return debt


def update_debt(session: Session, debt: Debt) -> Debt:
    """Update an existing debt."""
    session.add(debt)
    return debt
