"""Session ledger validation.

Every function here is pure. ``compute_balance`` and ``check_session`` are called
repeatedly while a user is still typing, so they accept partial input and never
raise. ``validate_session`` is the final accept/reject gate used before anything
is written.
"""

from collections.abc import Collection, Iterable, Sequence
import math

from loguru import logger

from pokerpal.core.exceptions import (
    DuplicatePlayerError,
    InvalidBuyInAmountError,
    InvalidDebtAmountError,
    MissingRequiredFieldError,
    NoParticipantsError,
    SelfDebtError,
    UnbalancedSessionError,
    UnknownPlayerError,
    ValidationError,
)
from pokerpal.schemas.ledger import (
    BalanceSummary,
    FieldError,
    PlayerEntry,
    SessionCheck,
    SessionDraft,
)

# Floating point currency tolerance for the zero-sum check
BALANCE_TOLERANCE = 0.01


def is_participating(entry: PlayerEntry) -> bool:
    """Return True if the player bought in (legacy entries always count)."""
    return entry.buy_ins is None or entry.buy_ins > 0


def participants(entries: Iterable[PlayerEntry]) -> list[PlayerEntry]:
    """Entries of players who took part, in input order."""
    return [entry for entry in entries if is_participating(entry)]


def clamp_non_participants(entries: Iterable[PlayerEntry]) -> list[PlayerEntry]:
    """Zero out stale results left on players who did not buy in."""
    clamped: list[PlayerEntry] = []
    for entry in entries:
        if not is_participating(entry) and entry.result != 0:
            logger.debug(f"Clamping stale result {entry.result} for {entry.name}")
            entry = entry.model_copy(update={"result": 0.0})  # noqa: PLW2901
        clamped.append(entry)
    return clamped


def compute_balance(entries: Iterable[PlayerEntry]) -> BalanceSummary:
    """Sum gains and losses of participating players."""
    total_wins = 0.0
    total_losses = 0.0
    for entry in participants(entries):
        if entry.result > 0:
            total_wins += entry.result
        elif entry.result < 0:
            total_losses += entry.result

    balance = total_wins + total_losses
    return BalanceSummary(
        total_wins=total_wins,
        total_losses=total_losses,
        balance=balance,
        is_balanced=abs(balance) < BALANCE_TOLERANCE,
    )


def compute_total_pot(
    buy_in_amount: float | None, entries: Iterable[PlayerEntry]
) -> float:
    """Total money in play for a session.

    Uses ``buy_in_amount * sum(buy_ins)`` when buy-ins are tracked, and falls
    back to the sum of positive results for legacy records.
    """
    playing = participants(entries)
    tracks_buy_ins = all(entry.buy_ins is not None for entry in playing)
    if buy_in_amount and buy_in_amount > 0 and tracks_buy_ins:
        return buy_in_amount * sum(entry.buy_ins or 0 for entry in playing)
    return sum(max(entry.result, 0.0) for entry in playing)


def _session_errors(
    draft: SessionDraft, roster: Sequence[str], balance: BalanceSummary
) -> list[ValidationError]:
    """Collect every problem with a draft, most basic first."""
    errors: list[ValidationError] = []

    if draft.date is None:
        errors.append(
            MissingRequiredFieldError(
                message="Date is required", details={"field": "date"}
            )
        )
    if not draft.location.strip():
        errors.append(
            MissingRequiredFieldError(
                message="Location is required", details={"field": "location"}
            )
        )
    if not draft.added_by.strip():
        errors.append(
            MissingRequiredFieldError(
                message="Please select who is adding this session",
                details={"field": "added_by"},
            )
        )
    elif draft.added_by not in roster:
        errors.append(
            MissingRequiredFieldError(
                message=f"{draft.added_by} is not a current player",
                details={"field": "added_by", "value": draft.added_by},
            )
        )

    errors.extend(
        UnknownPlayerError(
            message=f"{entry.name} is not on the roster",
            details={"field": entry.name},
        )
        for entry in draft.players
        if entry.name not in roster
    )

    seen: set[str] = set()
    for entry in draft.players:
        if entry.name in seen:
            errors.append(
                DuplicatePlayerError(
                    message=f"{entry.name} appears more than once",
                    details={"field": entry.name},
                )
            )
        seen.add(entry.name)

    if draft.buy_in_amount <= 0:
        errors.append(
            InvalidBuyInAmountError(
                details={"field": "buy_in_amount", "value": draft.buy_in_amount}
            )
        )

    if not participants(draft.players):
        errors.append(
            NoParticipantsError(details={"field": roster[0] if roster else "players"})
        )
    elif not balance.is_balanced:
        # Attached to the first roster member's field
        errors.append(
            UnbalancedSessionError(
                details={
                    "field": roster[0] if roster else "players",
                    "balance": round(balance.balance, 2),
                }
            )
        )

    return errors


def check_session(draft: SessionDraft, roster: Sequence[str]) -> SessionCheck:
    """Return the running balance and all current field errors for a draft."""
    players = clamp_non_participants(draft.players)
    balance = compute_balance(players)
    errors = _session_errors(draft, roster, balance)
    return SessionCheck(
        balance=balance,
        total_pot=compute_total_pot(draft.buy_in_amount, players),
        errors=[
            FieldError(code=e.code, message=e.message, field=e.field_name or "")
            for e in errors
        ],
    )


def validate_session(draft: SessionDraft, roster: Sequence[str]) -> BalanceSummary:
    """Accept or reject a session before it is recorded.

    Raises:
        MissingRequiredFieldError: date, location or added_by missing, or
            added_by not on the roster.
        UnknownPlayerError: an entry names a player not on the roster.
        DuplicatePlayerError: a player has more than one entry.
        InvalidBuyInAmountError: buy-in amount is not positive.
        NoParticipantsError: nobody bought in.
        UnbalancedSessionError: participant results do not sum to zero.
    """
    balance = compute_balance(clamp_non_participants(draft.players))
    errors = _session_errors(draft, roster, balance)
    if errors:
        logger.warning(f"Session rejected ({errors[0].code}): {errors[0].message}")
        raise errors[0]
    return balance


def validate_debt(
    from_player: str,
    to_player: str,
    amount: float,
    known_players: Collection[str] | None = None,
) -> None:
    """Reject a manually entered debt before it is written.

    When ``known_players`` is given, both names must be in it.
    """
    if not from_player.strip():
        raise MissingRequiredFieldError(
            message="Debtor is required", details={"field": "from_player"}
        )
    if not to_player.strip():
        raise MissingRequiredFieldError(
            message="Creditor is required", details={"field": "to_player"}
        )
    if known_players is not None:
        named = (("from_player", from_player), ("to_player", to_player))
        for field_name, name in named:
            if name not in known_players:
                raise UnknownPlayerError(
                    message=f"{name} is not a known player",
                    details={"field": field_name, "value": name},
                )
    if from_player == to_player:
        raise SelfDebtError(details={"field": "to_player", "value": to_player})
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidDebtAmountError(details={"field": "amount"})
