"""
Everything that describes a game in progress: the board, whose turn it is, the scores, and what is selected.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.checkers.board import Board
from src.checkers.cell import Cell
from src.checkers.pieces import Player


class TurnPhase(Enum):
    """
    States of the turn controller (see src/checkers/game.py).

    TURN_COMPLETE is transient: the controller flips the side to move and falls back to IDLE straight away.
    """

    IDLE = auto()
    SELECTED = auto()
    MUST_CONTINUE_CAPTURE = auto()
    TURN_COMPLETE = auto()


@dataclass
class GameState:
    board: Board
    side_to_move: Player
    scores: dict[Player, int]
    selected_cell: Optional[Cell] = None
    destinations: list[Cell] = field(default_factory=list)
    phase: TurnPhase = TurnPhase.IDLE

    @classmethod
    def new(
        cls, board: Optional[Board] = None, side_to_move: Player = Player.ONE
    ) -> Self:
        return cls(
            board=board if board is not None else Board.initial(),
            side_to_move=side_to_move,
            scores={player: 0 for player in Player},
        )

    @property
    def in_chain_capture(self) -> bool:
        return self.phase == TurnPhase.MUST_CONTINUE_CAPTURE

    def clear_selection(self) -> None:
        self.selected_cell = None
        self.destinations = []
        self.phase = TurnPhase.IDLE
