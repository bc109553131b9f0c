"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Callable
from uuid import UUID

from src.api.models import (
    ActionResponse,
    CellRequest,
    CreateGameRequest,
    DeleteGameRequest,
    DeselectRequest,
    GameResponse,
    GetGameRequest,
    LegalDestinationsResponse,
    LoadGameRequest,
    RestartGameRequest,
    SaveGameRequest,
)
from src.checkers.cell import Cell
from src.checkers.game import Game, Status
from src.checkers.moves import legal_destinations
from src.checkers.pieces import Player as DomainPlayer
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Player
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)

GameAction = Callable[[Game], bool]


class CheckersService:
    """Orchestration of layers for a game of checkers."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up a new game (standard setup unless a starting position is given) and store it."""
        new_game = Game.new_game(
            starting_position=request.starting_position,
            side_to_move=DomainPlayer[request.side_to_move.name],
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used once per frame by the front end to draw the board, the highlights and the score board.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def legal_destinations(self, request: CellRequest) -> LegalDestinationsResponse:
        """Where could the piece on this cell go? (read-only, the selection does not change)"""
        game = Game.from_model(self._fetch_game(request.game_id))
        cell = Cell.from_algebraic(request.cell)
        if not game.state.in_chain_capture:
            destinations = legal_destinations(game.board, cell)
        elif cell == game.state.selected_cell:
            destinations = legal_destinations(game.board, cell, continuation_only=True)
        else:
            # a capture chain locks every other piece
            destinations = []
        return LegalDestinationsResponse(
            game_id=request.game_id,
            cell=request.cell,
            legal_destinations=[dest.to_algebraic() for dest in destinations],
        )

    def activate_cell(self, request: CellRequest) -> ActionResponse:
        """A cell got clicked: the Game decides if this is a selection or a move."""
        cell = Cell.from_algebraic(request.cell)
        return self._play(request.game_id, lambda game: game.activate(cell))

    def select_piece(self, request: CellRequest) -> ActionResponse:
        cell = Cell.from_algebraic(request.cell)
        return self._play(request.game_id, lambda game: game.select(cell))

    def move_piece(self, request: CellRequest) -> ActionResponse:
        """Move the selected piece to the requested cell."""
        cell = Cell.from_algebraic(request.cell)
        return self._play(request.game_id, lambda game: game.move_to(cell))

    def deselect_piece(self, request: DeselectRequest) -> ActionResponse:
        return self._play(request.game_id, lambda game: game.deselect())

    def restart_game(self, request: RestartGameRequest) -> GameResponse:
        """Start over from the standard setup, keeping the same game ID."""
        game = Game.from_model(self._fetch_game(request.game_id))
        game.restart()
        self.repo.update_game(request.game_id, game.to_model())
        logger.info("Restarted game %s", request.game_id)
        return self._create_game_response(request.game_id, game)

    def save_game(self, request: SaveGameRequest) -> GameResponse:
        """Copy the current state of the game into a save slot."""
        stored_model = self._fetch_game(request.game_id)
        self.repo.save_snapshot(request.slot, stored_model)
        logger.info("Saved game %s to slot %r", request.game_id, request.slot)
        return self._create_game_response(request.game_id, Game.from_model(stored_model))

    def load_game(self, request: LoadGameRequest) -> GameResponse:
        """
        Replace the state of the game with the one stored in a save slot.

        A missing slot raises a RepositoryError, an unreadable one a GameStateError. Either way the live game is untouched.
        """
        self._fetch_game(request.game_id)
        snapshot = self.repo.load_snapshot(request.slot)
        if snapshot is None:
            logger.warning("No saved game found in slot %r", request.slot)
            raise RepositoryError(f"No saved game found in slot {request.slot!r}.")

        # Parse before writing anything: a broken snapshot must not overwrite the live game
        game = Game.from_model(snapshot)
        self.repo.update_game(request.game_id, game.to_model())
        logger.info("Loaded slot %r into game %s", request.slot, request.game_id)
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _play(self, game_id: UUID, action: GameAction) -> ActionResponse:
        """
        Run a controller action on the stored game and persist the result.

        NOTE a rejected action can still change the game (an illegal destination deselects), so always store.
        """
        game = Game.from_model(self._fetch_game(game_id))
        was_in_progress = game.status == Status.IN_PROGRESS
        accepted = action(game)
        if not accepted:
            logger.debug("Action rejected for game %s", game_id)

        self.repo.update_game(game_id, game.to_model())
        if was_in_progress and game.status == Status.FINISHED:
            logger.info("Game %s finished, winner: player %s", game_id, game.winner)
        return ActionResponse(
            accepted=accepted, game=self._create_game_response(game_id, game)
        )

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game to a GameResponse (for game with given ID.)"""
        model = game.to_model()
        return GameResponse(
            game_id=game_id,
            position=model.position,
            side_to_move=Player(model.side_to_move),
            scores={Player(key): points for key, points in model.scores.items()},
            piece_counts={
                _to_shared_player(player): count
                for player, count in game.piece_counts().items()
            },
            selected_cell=model.selected_cell,
            legal_destinations=[cell.to_algebraic() for cell in game.state.destinations],
            in_chain_capture=model.in_chain_capture,
            status=model.status,
            winner=Player(model.winner) if model.winner else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model


def _to_shared_player(player: DomainPlayer) -> Player:
    return Player[player.name]
