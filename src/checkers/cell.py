"""
A cell on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

# Ethiopian checkers is played on an 8x8 grid
BOARD_SIZE = 8

Vector = tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """Zero-based (column, row) coordinate. Row 0 is Player ONE's home row."""

    column: int
    row: int

    @classmethod
    def from_algebraic(cls, name: str) -> Cell:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        column = ascii_lowercase.index(name[0].lower())
        row = int(name[1:]) - 1
        return cls(column, row)

    def to_algebraic(self) -> str:
        return f"{ascii_lowercase[self.column]}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.column < BOARD_SIZE) and (0 <= self.row < BOARD_SIZE)

    def is_dark(self) -> bool:
        """Only dark cells ((column + row) odd) ever hold a piece."""
        return (self.column + self.row) % 2 == 1

    def step(self, direction: Vector, times: int = 1) -> Cell:
        dc, dr = direction
        return Cell(self.column + dc * times, self.row + dr * times)
