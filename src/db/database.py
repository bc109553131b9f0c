"""Generate database session"""

from functools import lru_cache
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core import config
from src.db.schema import Base


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    """The engine is only built on first use, from the configured URL."""
    engine = create_engine(config.DATABASE_URL, echo=config.SQL_ECHO)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
