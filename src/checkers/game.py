"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is the turn / capture-chain controller: it decides what a click on a cell means (select, move, deselect),
whether a piece must keep capturing, and when the turn passes to the opponent.

Turn phases
----

IDLE --select(own piece)--> SELECTED --move--> MUST_CONTINUE_CAPTURE (captured, not promoted, more captures available)
                                         \\--> TURN_COMPLETE --> IDLE (side to move flipped)
MUST_CONTINUE_CAPTURE --move--> same rule, re-evaluated from the new cell.

While MUST_CONTINUE_CAPTURE the selection is locked to the capturing piece.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.checkers.applier import MoveOutcome, apply_move
from src.checkers.board import Board
from src.checkers.cell import Cell
from src.checkers.moves import legal_destinations
from src.checkers.notation import STARTING_POSITION, is_valid_cell_name
from src.checkers.pieces import Player
from src.checkers.state import GameState, TurnPhase
from src.checkers.terminal import is_terminal
from src.core.exceptions import GameStateError
from src.core.models import GameModel


class Status(Enum):
    IN_PROGRESS = auto()
    FINISHED = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    state: GameState
    status: Status = Status.IN_PROGRESS
    winner: Optional[Player] = None

    @classmethod
    def new_game(
        cls,
        starting_position: Optional[str] = None,
        side_to_move: Player = Player.ONE,
    ) -> Self:
        """Start a game from the standard setup, or from a given board position."""
        board = Board.from_notation(starting_position or STARTING_POSITION)
        game = cls(GameState.new(board, side_to_move))
        # a custom position might already be decided
        game._update_game_status()
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )
        if model.in_chain_capture and model.selected_cell is None:
            raise GameStateError("A capture chain requires a selected piece.")

        board = Board.from_notation(model.position)
        side_to_move = _player_from_key(model.side_to_move)
        scores = {player: 0 for player in Player}
        scores.update(
            {_player_from_key(key): points for key, points in model.scores.items()}
        )
        state = GameState(board=board, side_to_move=side_to_move, scores=scores)

        # cached destinations are not stored: recompute them for the selected piece
        if model.selected_cell is not None:
            if not is_valid_cell_name(model.selected_cell):
                raise GameStateError(
                    f"Invalid selected cell: {model.selected_cell!r}."
                )
            cell = Cell.from_algebraic(model.selected_cell)
            piece = board.piece(cell)
            if piece is None or piece.owner != side_to_move:
                raise GameStateError(
                    f"Selected cell {model.selected_cell!r} does not hold a piece of the side to move."
                )
            state.selected_cell = cell
            state.phase = (
                TurnPhase.MUST_CONTINUE_CAPTURE
                if model.in_chain_capture
                else TurnPhase.SELECTED
            )
            state.destinations = legal_destinations(
                board, cell, continuation_only=model.in_chain_capture
            )
            if model.in_chain_capture and not state.destinations:
                raise GameStateError(
                    f"A capture chain from {model.selected_cell!r} has no capture left to make."
                )

        winner = _player_from_key(model.winner) if model.winner else None
        return cls(state, Status[status_name], winner)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        selected = self.state.selected_cell
        return GameModel(
            position=self.state.board.to_notation(),
            side_to_move=_player_to_key(self.state.side_to_move),
            scores={
                _player_to_key(player): points
                for player, points in self.state.scores.items()
            },
            selected_cell=selected.to_algebraic() if selected else None,
            in_chain_capture=self.state.in_chain_capture,
            status=self.status.name.lower().replace("_", " "),
            winner=_player_to_key(self.winner) if self.winner else None,
        )

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    @property
    def board(self) -> Board:
        return self.state.board

    def piece_counts(self) -> dict[Player, int]:
        return self.state.board.count_pieces()

    def restart(self) -> None:
        """Back to the standard setup, Player ONE to move, scores reset."""
        self.state = GameState.new()
        self.status = Status.IN_PROGRESS
        self.winner = None

    def activate(self, cell: Cell) -> bool:
        """
        A cell got clicked
        ----

        * nothing selected yet: try to select the piece on the cell
        * in a capture chain: the click can only be the next landing cell
        * otherwise: clicking one of your own pieces changes the selection, anything else is a move attempt
          (an illegal destination deselects)

        Returns whether the click changed anything.
        """
        self._assert_in_progress()
        if self.phase == TurnPhase.IDLE:
            return self.select(cell)

        if self.phase == TurnPhase.MUST_CONTINUE_CAPTURE:
            return self.move_to(cell)

        if self._is_own_piece(cell):
            return self.select(cell)
        return self.move_to(cell)

    def select(self, cell: Cell) -> bool:
        """
        Select a piece of the side to move and compute where it can go.

        Rejected (no state change) when the cell is empty / off the board / holds an opponent piece,
        or when a capture chain locks the selection to another piece.
        """
        self._assert_in_progress()
        if self.state.in_chain_capture:
            return cell == self.state.selected_cell

        if not self._is_own_piece(cell):
            return False

        self.state.selected_cell = cell
        self.state.destinations = legal_destinations(self.state.board, cell)
        self.state.phase = TurnPhase.SELECTED
        return True

    def deselect(self) -> bool:
        """Cancelling is allowed at any time, except in the middle of a capture chain."""
        if self.state.in_chain_capture:
            return False
        self.state.clear_selection()
        return True

    def move_to(self, destination: Cell) -> bool:
        """
        Attempt to move the selected piece
        -----

        1. destination must be one of the cached legal destinations
           (if not: deselect, unless a capture chain is forced, then the attempt is simply ignored)
        2. apply the move
        3. decide between continuing the capture chain and completing the turn
        4. update game status (if needed)
        """
        self._assert_in_progress()
        if self.phase == TurnPhase.IDLE:
            return False

        if destination not in self.state.destinations:
            if not self.state.in_chain_capture:
                self.state.clear_selection()
            return False

        outcome = apply_move(self.state, destination)
        if self._next_phase(outcome, destination) == TurnPhase.MUST_CONTINUE_CAPTURE:
            self._continue_capture(destination)
        else:
            self._complete_turn()

        self._update_game_status()
        return True

    # -- PRIVATE HELPERS ---
    def _next_phase(self, outcome: MoveOutcome, destination: Cell) -> TurnPhase:
        """
        Promotion always ends the turn, even if the new king could capture again.
        Otherwise a capture continues as long as the same piece can capture from where it landed.
        """
        if outcome.promoted:
            return TurnPhase.TURN_COMPLETE
        if outcome.captured and legal_destinations(
            self.state.board, destination, continuation_only=True
        ):
            return TurnPhase.MUST_CONTINUE_CAPTURE
        return TurnPhase.TURN_COMPLETE

    def _continue_capture(self, cell: Cell) -> None:
        self.state.selected_cell = cell
        self.state.destinations = legal_destinations(
            self.state.board, cell, continuation_only=True
        )
        self.state.phase = TurnPhase.MUST_CONTINUE_CAPTURE

    def _complete_turn(self) -> None:
        self.state.phase = TurnPhase.TURN_COMPLETE
        self.state.side_to_move = self.state.side_to_move.opponent
        self.state.clear_selection()

    def _update_game_status(self) -> None:
        """Checks (for the side to move) if the game has ended and changes status accordingly."""
        finished, winner = is_terminal(self.state.board, self.state.side_to_move)
        if finished:
            self.status = Status.FINISHED
            self.winner = winner
            self.state.clear_selection()

    def _is_own_piece(self, cell: Cell) -> bool:
        if not cell.is_within_bounds():
            return False
        piece = self.state.board.piece(cell)
        return piece is not None and piece.owner == self.state.side_to_move

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(
                f"Game is not in progress. status: {self.status.name.lower()}"
            )


def _player_from_key(key: str) -> Player:
    if key.upper() not in Player.__members__:
        raise GameStateError(
            f"Unknown player: {key!r}. \nPick one from {','.join([player.name.lower() for player in Player])}"
        )
    return Player[key.upper()]


def _player_to_key(player: Player) -> str:
    return player.name.lower()
