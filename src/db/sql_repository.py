"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.db.schema import DBGame, DBSavedGame

logger = logging.getLogger(__name__)

GameRecord = DBGame | DBSavedGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_into(game_db, game)
        self.db.add(game_db)
        self._commit()
        self.db.refresh(game_db)
        logger.debug("Stored new game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        self._commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self._commit()
        return game_model

    def save_snapshot(self, slot: str, game: GameModel) -> GameModel:
        """Copy the game into a named save slot (overwriting what was there)."""
        saved_db = self.db.get(DBSavedGame, slot)
        if saved_db is None:
            saved_db = DBSavedGame(slot=slot)
            self.db.add(saved_db)
        self._copy_into(saved_db, game)
        self._commit()
        self.db.refresh(saved_db)
        return self._to_model(saved_db)

    def load_snapshot(self, slot: str) -> GameModel | None:
        """Get the game stored in a save slot, if the slot exists."""
        saved_db = self.db.get(DBSavedGame, slot)
        if saved_db is None:
            return None
        return self._to_model(saved_db)

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _commit(self) -> None:
        """A failed write is rolled back and reported as a RepositoryError"""
        try:
            self.db.commit()
        except SQLAlchemyError as error:
            self.db.rollback()
            logger.warning("Database write failed: %s", error)
            raise RepositoryError(f"Could not write to the database: {error}") from error

    def _copy_into(self, record: GameRecord, game: GameModel) -> None:
        record.position = game.position
        record.side_to_move = game.side_to_move
        record.scores = dict(game.scores)
        record.selected_cell = game.selected_cell
        record.in_chain_capture = game.in_chain_capture
        record.status = game.status
        record.winner = game.winner

    def _to_model(self, record: GameRecord) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            position=record.position,
            side_to_move=record.side_to_move,
            scores=dict(record.scores),
            selected_cell=record.selected_cell,
            in_chain_capture=record.in_chain_capture,
            status=record.status,
            winner=record.winner,
        )
