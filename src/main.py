"""
Wiring of the layers: logging, database and the service on top of it.

A front end (GUI, terminal, web) only needs build_service() and then talks to the WhistService.
"""

import logging

from sqlalchemy.orm import Session

from src.config.settings import settings
from src.db.database import SessionLocal, init_db
from src.db.sql_repository import SQLSessionRepository
from src.services.whist_service import WhistService


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_service(db: Session | None = None) -> WhistService:
    """Service backed by the configured database (or by the given database session)."""
    configure_logging()
    if db is None:
        init_db()
        db = SessionLocal()
    return WhistService(SQLSessionRepository(db))
