"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.checkers.board import Board
from src.checkers.cell import Cell
from src.checkers.pieces import Piece, Player, Rank
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

# (column, row, owner, rank)
PiecePlacement = tuple[int, int, Player, Rank]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def board_with() -> Callable[..., Board]:
    """Call the inner function with (column, row, owner, rank) tuples to get a board holding just those pieces."""

    def _create_board(*placements: PiecePlacement) -> Board:
        board = Board.empty()
        for column, row, owner, rank in placements:
            board.place_piece(Piece(owner, rank), Cell(column, row))
        return board

    return _create_board
