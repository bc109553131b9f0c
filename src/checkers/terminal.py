"""Has the game ended? Evaluated for the side that is about to act."""

from typing import Optional

from src.checkers.board import Board
from src.checkers.moves import has_any_legal_move
from src.checkers.pieces import Player


def is_terminal(board: Board, side_to_move: Player) -> tuple[bool, Optional[Player]]:
    """
    Two ways to lose:

    1. you have no pieces left (checked for both sides, whoever is to move)
    2. it is your turn and none of your pieces has a plain move or a capture

    Returns (game over?, winner)
    """
    counts = board.count_pieces()
    opponent = side_to_move.opponent
    if counts[side_to_move] == 0:
        return True, opponent
    if counts[opponent] == 0:
        return True, side_to_move

    if not has_any_legal_move(board, side_to_move):
        return True, opponent
    return False, None
