"""
Geometry of moving and capturing

Key idea: Use strategy pattern to define the candidate moves for each rank of piece.
A man takes single steps (forward only), a king uses raycasting along the four diagonals.

The move generator has no notion of turns: the Game decides whose piece may be asked about.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol

from src.checkers.cell import Cell, Vector
from src.checkers.pieces import Piece, Player, Rank, forward_row_step

# Most destinations a king can reach from a single cell of an 8x8 board (a king on d4 or e5: 4 + 3 + 3 + 3)
MAX_DESTINATIONS = 13

DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, cell: Cell) -> Optional[Piece]: ...
    def occupied_cells(self, owner: Optional[Player] = None) -> Iterator[Cell]: ...


@dataclass(frozen=True)
class Move:
    """A single hop of a piece. A capture remembers the cell of the piece it jumps."""

    from_cell: Cell
    to_cell: Cell
    captured_cell: Optional[Cell] = None

    @property
    def is_capture(self) -> bool:
        return self.captured_cell is not None


def forward_diagonals(player: Player) -> list[Vector]:
    """A man only moves towards the opponent's back row"""
    dr = forward_row_step(player)
    return [(1, dr), (-1, dr)]


def _is_empty(cell: Cell, board: Board) -> bool:
    return cell.is_within_bounds() and board.piece(cell) is None


# --- MOVEMENT RULES ---
def single_step_moves(
    cell: Cell, board: Board, directions: list[Vector], continuation_only: bool
) -> list[Move]:
    """
    Men move a single cell along a direction, or jump an adjacent opponent piece when the cell right behind it is free.
    Plain steps are left out when only a continuation of a capture is allowed.
    """
    player = board.piece(cell).owner
    moves: list[Move] = []
    for direction in directions:
        adjacent = cell.step(direction)
        if not adjacent.is_within_bounds():
            continue

        occupant = board.piece(adjacent)
        if occupant is None:
            if not continuation_only:
                moves.append(Move(from_cell=cell, to_cell=adjacent))
            continue

        landing = cell.step(direction, 2)
        if occupant.owner != player and _is_empty(landing, board):
            moves.append(Move(from_cell=cell, to_cell=landing, captured_cell=adjacent))
    return moves


def raycasting_moves(
    cell: Cell, board: Board, directions: list[Vector], continuation_only: bool
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    Move along every direction until we hit another piece or the edge of the board.
    Every empty cell on the way is a plain move.

    If the first piece hit belongs to the opponent and the cell directly behind it is empty,
    that cell is a capture: the king lands immediately after the piece it jumps (no further flight).
    A friendly piece, two pieces in a row, or the edge of the board close the ray.
    """
    player = board.piece(cell).owner
    moves: list[Move] = []
    for direction in directions:
        target = cell
        while True:
            target = target.step(direction)
            if not target.is_within_bounds():
                break

            occupant = board.piece(target)
            if occupant is None:
                if not continuation_only:
                    moves.append(Move(from_cell=cell, to_cell=target))
                continue

            landing = target.step(direction)
            if occupant.owner != player and _is_empty(landing, board):
                moves.append(Move(from_cell=cell, to_cell=landing, captured_cell=target))
            break
    return moves


def candidate_man_moves(
    cell: Cell, board: Board, continuation_only: bool = False
) -> list[Move]:
    """Men step and capture diagonally forward only"""
    player = board.piece(cell).owner
    return single_step_moves(cell, board, forward_diagonals(player), continuation_only)


def candidate_king_moves(
    cell: Cell, board: Board, continuation_only: bool = False
) -> list[Move]:
    """Kings fly along all four diagonals"""
    return raycasting_moves(cell, board, DIAGONALS, continuation_only)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Cell, Board, bool], list[Move]]
MOVEMENT_RULES: dict[Rank, CandidateMovesFn] = {
    Rank.MAN: candidate_man_moves,
    Rank.KING: candidate_king_moves,
}


def legal_moves(
    board: Board, from_cell: Cell, continuation_only: bool = False
) -> list[Move]:
    """
    Legal moves of the piece standing on `from_cell`. An empty cell has none.

    With `continuation_only` the result only holds captures: a piece that just captured may not end its turn with a quiet move.
    """
    piece = board.piece(from_cell)
    if piece is None:
        return []

    movement_rule = MOVEMENT_RULES[piece.rank]
    moves = movement_rule(from_cell, board, continuation_only)
    assert len(moves) <= MAX_DESTINATIONS, f"{len(moves)} moves from {from_cell.to_algebraic()}"
    if continuation_only:
        return [move for move in moves if move.is_capture]
    return moves


def legal_destinations(
    board: Board, from_cell: Cell, continuation_only: bool = False
) -> list[Cell]:
    """The cells the piece on `from_cell` may move to (order carries no meaning)"""
    return [move.to_cell for move in legal_moves(board, from_cell, continuation_only)]


def has_any_legal_move(board: Board, player: Player) -> bool:
    """Does any piece of the player have a plain move or a capture?"""
    return any(legal_moves(board, cell) for cell in board.occupied_cells(player))
