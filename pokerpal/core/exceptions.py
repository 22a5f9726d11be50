"""Custom exception classes for consistent error handling across the application."""

from dataclasses import dataclass, field
from typing import TypeAlias

# Shared type alias for error detail values
ErrorDetails: TypeAlias = dict[
    str, str | int | float | bool | list[str] | list[dict[str, str | int]] | None
]


@dataclass
class AppError(Exception):
    """Base exception for all application errors."""

    code: str = "app_error"
    message: str = "An application error occurred"
    details: ErrorDetails = field(default_factory=dict)

    def __str__(self) -> str:  # pyright: ignore[reportImplicitOverride]
        return self.message


@dataclass
class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    code: str = "not_found"
    message: str = "Resource not found"


@dataclass
class ValidationError(AppError):
    """Raised when domain validation fails."""

    code: str = "validation_error"
    message: str = "Validation failed"

    @property
    def field_name(self) -> str | None:
        """Name of the input field the error belongs to, if any."""
        value = self.details.get("field")
        return value if isinstance(value, str) else None


@dataclass
class ConflictError(AppError):
    """Raised when an operation conflicts with existing state."""

    code: str = "conflict"
    message: str = "Resource conflict"


@dataclass
class InternalError(AppError):
    """Raised for unexpected internal errors."""

    code: str = "internal_error"
    message: str = "Internal server error"


# Ledger validation family. Each one is user-correctable and carries
# details["field"] so the caller can show it next to the offending input.


@dataclass
class UnbalancedSessionError(ValidationError):
    """Participant results do not sum to zero."""

    code: str = "unbalanced_session"
    message: str = "The sum of all player results must be 0"


@dataclass
class NoParticipantsError(ValidationError):
    """No player bought in."""

    code: str = "no_participants"
    message: str = "At least one player must have bought in"


@dataclass
class InvalidBuyInAmountError(ValidationError):
    code: str = "invalid_buy_in_amount"
    message: str = "Buy-in amount must be greater than 0"


@dataclass
class MissingRequiredFieldError(ValidationError):
    code: str = "missing_required_field"
    message: str = "A required field is missing"


@dataclass
class UnknownPlayerError(ValidationError):
    """An entry names a player that is not on the roster."""

    code: str = "unknown_player"
    message: str = "Player is not on the roster"


@dataclass
class DuplicatePlayerError(ValidationError):
    code: str = "duplicate_player"
    message: str = "Player appears more than once"


@dataclass
class SelfDebtError(ValidationError):
    code: str = "self_debt"
    message: str = "A player cannot owe themselves"


@dataclass
class InvalidDebtAmountError(ValidationError):
    code: str = "invalid_debt_amount"
    message: str = "Debt amount must be greater than 0"


@dataclass
class SettlementError(InternalError):
    """Settling a session failed and nothing was written."""

    code: str = "settlement_failed"
    message: str = "Settlement failed, no changes were made"
    retryable: bool = True
