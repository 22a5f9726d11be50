"""Script to import a JSON backup of a home game into the database."""

import os
import sys

from dotenv import load_dotenv
from loguru import logger
from sqlmodel import Session

from pokerpal.core.db import create_db_and_tables, engine
from pokerpal.core.logging_config import configure_logging
from pokerpal.services.import_service import import_backup

load_dotenv()

if __name__ == "__main__":
    configure_logging()
    backup_file = (
        sys.argv[1] if len(sys.argv) > 1 else os.getenv("BACKUP_FILE", "backup.json")
    )
    logger.info(f"Starting backup import from {backup_file}...")
    create_db_and_tables()
    with Session(engine) as session:
        import_backup(session, backup_file)
    logger.success("Backup import script completed successfully")
