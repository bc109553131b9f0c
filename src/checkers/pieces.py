"""Defines the pieces of Ethiopian checkers and who owns them"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.checkers.cell import BOARD_SIZE


class Player(Enum):
    ONE = auto()
    TWO = auto()

    @property
    def opponent(self) -> "Player":
        return Player.TWO if self == Player.ONE else Player.ONE


class Rank(Enum):
    MAN = auto()
    KING = auto()


NOTATION_TO_RANK: dict[str, Rank] = {
    "m": Rank.MAN,
    "k": Rank.KING,
}

RANK_TO_NOTATION: dict[Rank, str] = {
    value: key for key, value in NOTATION_TO_RANK.items()
}


def forward_row_step(player: Player) -> int:
    """Player ONE starts at the top (row 0) and moves down the board, Player TWO moves up."""
    return 1 if player == Player.ONE else -1


def promotion_row(player: Player) -> int:
    """A man gets crowned on the opponent's back row"""
    return BOARD_SIZE - 1 if player == Player.ONE else 0


@dataclass
class Piece:
    owner: Player
    rank: Rank = Rank.MAN

    @classmethod
    def from_notation(cls, character: str) -> Self:
        # upper case: Player ONE, lower case: Player TWO
        owner = Player.ONE if character.isupper() else Player.TWO
        rank = NOTATION_TO_RANK[character.lower()]
        return cls(owner, rank)

    def to_notation(self) -> str:
        character = RANK_TO_NOTATION[self.rank]
        return character.upper() if self.owner == Player.ONE else character

    @property
    def is_king(self) -> bool:
        return self.rank == Rank.KING

    def promote(self) -> None:
        self.rank = Rank.KING
