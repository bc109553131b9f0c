"""
Executing a chosen move on the board: relocation, capture resolution and promotion.

The applier trusts its caller. The destination must come from the legal destinations of the selected piece,
so there is no validation here beyond asserting that precondition (and no rollback).
"""

from dataclasses import dataclass
from typing import Optional

from src.checkers.board import Board
from src.checkers.cell import Cell
from src.checkers.pieces import Piece, promotion_row
from src.checkers.state import GameState


@dataclass(frozen=True)
class MoveOutcome:
    captured_cell: Optional[Cell]
    promoted: bool

    @property
    def captured(self) -> bool:
        return self.captured_cell is not None


def apply_move(state: GameState, destination: Cell) -> MoveOutcome:
    """
    Move the selected piece to `destination`
    ----

    1. find (and remove) the jumped piece, if any. The mover's owner scores a point.
    2. relocate the piece
    3. crown a man that reaches the opponent's back row
    4. the cached destinations are stale now: clear them
    """
    origin = state.selected_cell
    assert origin is not None, "apply_move requires a selected piece"
    assert destination.is_within_bounds(), f"{destination} is not on the board"

    board = state.board
    piece = board.piece(origin)
    assert piece is not None, f"no piece on the selected cell {origin.to_algebraic()}"

    captured_cell = find_captured_cell(board, origin, destination, piece)
    if captured_cell is not None:
        board.remove_piece(captured_cell)
        state.scores[piece.owner] += 1

    board.move_piece(origin, destination)

    promoted = False
    if not piece.is_king and destination.row == promotion_row(piece.owner):
        board.promote_piece(destination)
        promoted = True

    state.destinations = []
    return MoveOutcome(captured_cell=captured_cell, promoted=promoted)


def find_captured_cell(
    board: Board, origin: Cell, destination: Cell, piece: Piece
) -> Optional[Cell]:
    """
    The kind of move follows from the displacement:

    * a single step is never a capture
    * a man that moves two cells jumped the piece on the midpoint
    * a king walks the ray towards its destination: the first occupied cell holds the (single) piece it jumps.
      No occupied cell on the way means the king made a long plain move.
    """
    d_column = destination.column - origin.column
    d_row = destination.row - origin.row
    distance = max(abs(d_column), abs(d_row))
    if distance <= 1:
        return None

    if not piece.is_king:
        return Cell(origin.column + d_column // 2, origin.row + d_row // 2)

    direction = (d_column // distance, d_row // distance)
    for steps in range(1, distance):
        cell = origin.step(direction, steps)
        if board.piece(cell) is not None:
            return cell
    return None
