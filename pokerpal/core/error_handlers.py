"""Global exception handlers for the PokerPal API.

Every error leaves the API as ``{"error": {"code", "message", "details"}}``.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from pokerpal.core.exceptions import (
    AppError,
    ConflictError,
    ErrorDetails,
    InternalError,
    NotFoundError,
    SettlementError,
    ValidationError,
)

if TYPE_CHECKING:
    ErrorPayload: TypeAlias = dict[str, dict[str, str | ErrorDetails]]

# Status code and log level per error class; lookup follows the exception MRO
APP_ERROR_STATUS: list[tuple[type[AppError], int, str]] = [
    (NotFoundError, 404, "DEBUG"),
    (ValidationError, 422, "WARNING"),
    (ConflictError, 409, "WARNING"),
    (SettlementError, 503, "ERROR"),
    (InternalError, 500, "ERROR"),
    (AppError, 400, "WARNING"),
]


def _error_payload(
    code: str,
    message: str,
    details: ErrorDetails | None = None,
) -> "ErrorPayload":
    """Build consistent error response payload."""
    return {"error": {"code": code, "message": message, "details": details or {}}}


def _describe_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Location, message and type of each error, without the rejected input.

    Rejected input may hold values JSON cannot carry, such as NaN.
    """
    return [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]


def _app_error_handler(
    status_code: int, level: str
) -> Callable[[Request, AppError], JSONResponse]:
    def handler(_: Request, exc: AppError) -> JSONResponse:
        logger.log(level, f"{type(exc).__name__} ({exc.code}): {exc.message}")
        details = exc.details
        if isinstance(exc, SettlementError):
            details = {**details, "retryable": exc.retryable}
        return JSONResponse(
            status_code=status_code,
            content=_error_payload(exc.code, exc.message, details),
        )

    return handler


def register_exception_handlers(app: FastAPI) -> None:
    """Register all global exception handlers on the FastAPI app.

    Each application error class in APP_ERROR_STATUS gets a handler built by
    _app_error_handler. The framework-level handlers below are registered with
    decorators, which static analysis tools do not see as usage.
    """
    for exc_class, status_code, level in APP_ERROR_STATUS:
        app.add_exception_handler(
            exc_class,
            _app_error_handler(status_code, level),  # pyright: ignore[reportArgumentType]
        )

    @app.exception_handler(RequestValidationError)
    def request_validation_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug(f"Request validation failed: {exc.errors()}")
        return JSONResponse(
            status_code=422,
            content=_error_payload(
                "request_validation_error",
                "Request validation failed",
                cast("ErrorDetails", {"errors": _describe_errors(exc)}),
            ),
        )

    @app.exception_handler(SQLAlchemyError)
    def sqlalchemy_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.exception(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content=_error_payload("database_error", "Database error"),
        )

    @app.exception_handler(Exception)
    def unhandled_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content=_error_payload("internal_error", "Internal server error"),
        )
