"""FastAPI application for the PokerPal ledger service."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from pokerpal.api.v1.router import api_router
from pokerpal.core.db import create_db_and_tables
from pokerpal.core.error_handlers import register_exception_handlers
from pokerpal.core.logging_config import configure_logging


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    configure_logging()
    logger.info("Starting PokerPal application...")
    logger.info("Initializing database...")
    create_db_and_tables()
    logger.success("Database initialized successfully")
    await asyncio.sleep(0)  # Satisfy RUF029 (async function must await)
    logger.success("Application startup complete")
    yield
    logger.info("Shutting down PokerPal application...")


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/")
def read_root() -> dict[str, str]:
    """Return welcome message for the root endpoint."""
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to PokerPal API"}
