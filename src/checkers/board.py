"""The game board: which piece stands on which cell. Pure data, no game rules."""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.checkers.cell import BOARD_SIZE, Cell
from src.checkers.notation import EMPTY_POSITION, STARTING_POSITION, is_valid_position
from src.checkers.pieces import Piece, Player
from src.core.exceptions import InvalidNotationError, OutOfBoundsError


@dataclass
class Board:
    # only occupied cells are stored
    position: dict[Cell, Piece] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Self:
        return cls.from_notation(EMPTY_POSITION)

    @classmethod
    def initial(cls) -> Self:
        """Each player fills the dark cells of their three nearest rows."""
        return cls.from_notation(STARTING_POSITION)

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its position string (see src/checkers/notation.py)"""
        if not is_valid_position(notation):
            raise InvalidNotationError(f"Invalid board position: {notation!r}")

        position: dict[Cell, Piece] = {}
        for row, row_notation in enumerate(notation.split("/")):
            column = 0
            for character in row_notation:
                if character.isalpha():
                    position[Cell(column, row)] = Piece.from_notation(character)
                    column += 1
                else:
                    column += int(character)
        return cls(position)

    def to_notation(self) -> str:
        return "/".join(self._row_to_notation(row) for row in range(BOARD_SIZE))

    def _row_to_notation(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for column in range(BOARD_SIZE):
            piece = self.position.get(Cell(column, row))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_notation())

        # a fully empty row still gets its count
        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def piece(self, cell: Cell) -> Optional[Piece]:
        self._assert_within_bounds(cell)
        return self.position.get(cell)

    def is_empty(self, cell: Cell) -> bool:
        return self.piece(cell) is None

    def place_piece(self, piece: Piece, cell: Cell) -> None:
        self._assert_within_bounds(cell)
        self.position[cell] = piece

    def remove_piece(self, cell: Cell) -> Optional[Piece]:
        self._assert_within_bounds(cell)
        return self.position.pop(cell, None)

    def move_piece(self, from_cell: Cell, to_cell: Cell) -> None:
        """Relocate the piece and clear the cell it came from"""
        piece = self.remove_piece(from_cell)
        # only ever called with the cell of a selected piece
        assert piece is not None, f"no piece on {from_cell.to_algebraic()}"
        self.place_piece(piece, to_cell)

    def promote_piece(self, cell: Cell) -> None:
        piece = self.piece(cell)
        if piece is not None:
            piece.promote()

    def occupied_cells(self, owner: Optional[Player] = None) -> Iterator[Cell]:
        """Occupied cells in row-major order, optionally only those of one player"""
        for cell in sorted(self.position, key=lambda c: (c.row, c.column)):
            if owner is None or self.position[cell].owner == owner:
                yield cell

    def count_pieces(self) -> dict[Player, int]:
        counts = {player: 0 for player in Player}
        for piece in self.position.values():
            counts[piece.owner] += 1
        return counts

    def _assert_within_bounds(self, cell: Cell) -> None:
        if not cell.is_within_bounds():
            raise OutOfBoundsError(
                f"Cell ({cell.column}, {cell.row}) is outside of the {BOARD_SIZE}x{BOARD_SIZE} board"
            )
