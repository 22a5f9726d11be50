"""Request-scoped dependencies shared by the v1 routers."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from loguru import logger
from sqlmodel import Session

from pokerpal.core.db import engine


def get_session(request: Request) -> Generator[Session, None, None]:
    """One database session per request.

    Services commit their own work; anything left uncommitted when the request
    ends is rolled back when the session closes.
    """
    with Session(engine) as session:
        logger.debug(f"DB session opened for {request.method} {request.url.path}")
        yield session
        if session.new or session.dirty or session.deleted:
            logger.warning(
                f"Discarding uncommitted changes from {request.method} "
                + f"{request.url.path}"
            )


SessionDep = Annotated[Session, Depends(get_session)]
