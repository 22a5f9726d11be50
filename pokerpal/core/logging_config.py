"""Logging configuration for the PokerPal ledger service."""

import os
from pathlib import Path
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


def configure_logging() -> None:
    """Configure loguru logger with file output and rotation."""
    logs_dir = Path(LOG_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Remove default handler (console only)
    logger.remove()

    logger.add(
        sink=sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=LOG_LEVEL,
        colorize=True,
    )

    logger.add(
        sink=logs_dir / "pokerpal_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level=LOG_LEVEL,
        rotation="00:00",  # Rotate at midnight
        retention="30 days",
        compression="zip",
        enqueue=True,  # Thread-safe logging
    )

    # Settlement failures land here too, keep them longer
    logger.add(
        sink=logs_dir / "pokerpal_errors_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="ERROR",
        rotation="00:00",
        retention="90 days",
        compression="zip",
        enqueue=True,
    )

    logger.info(f"Logging configured: console + file output enabled in {logs_dir}")
