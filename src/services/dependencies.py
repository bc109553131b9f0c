"""Wiring of the layers: database session -> repository -> service."""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from src.core.config import configure_logging
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.services.checkers_service import CheckersService


def get_checkers_service(db: Session) -> CheckersService:
    return CheckersService(SQLGameRepository(db))


@contextmanager
def open_checkers_service() -> Iterator[CheckersService]:
    """Set up logging and a service backed by the configured database. The session is closed on exit."""
    configure_logging()
    sessions = get_db()
    db = next(sessions)
    try:
        yield get_checkers_service(db)
    finally:
        sessions.close()
