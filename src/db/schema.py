"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    position: Mapped[str]
    side_to_move: Mapped[str]
    scores: Mapped[dict[str, int]] = mapped_column(JSON)
    selected_cell: Mapped[Optional[str]]
    in_chain_capture: Mapped[bool] = mapped_column(default=False)
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBSavedGame(Base):
    """A named save slot: a full copy of a game at the moment it was saved. Saving again overwrites the slot."""

    __tablename__ = "saved_games"
    slot: Mapped[str] = mapped_column(primary_key=True)
    position: Mapped[str]
    side_to_move: Mapped[str]
    scores: Mapped[dict[str, int]] = mapped_column(JSON)
    selected_cell: Mapped[Optional[str]]
    in_chain_capture: Mapped[bool] = mapped_column(default=False)
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    saved_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
