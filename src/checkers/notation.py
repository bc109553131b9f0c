"""
Text encoding of a board position (FEN-like).

Rows are separated by slashes, starting with row 0 (Player ONE's home row).
Inside a row the characters are read from column 0 to column 7:
* a letter is a piece: 'm' man, 'k' king. Upper case for Player ONE, lower case for Player TWO.
* a digit is the amount of consecutive empty cells

ex. the starting position:
1M1M1M1M/M1M1M1M1/1M1M1M1M/8/8/m1m1m1m1/1m1m1m1m/m1m1m1m1
"""

from string import ascii_lowercase

from src.checkers.cell import BOARD_SIZE, Cell
from src.checkers.pieces import NOTATION_TO_RANK

STARTING_POSITION = "1M1M1M1M/M1M1M1M1/1M1M1M1M/8/8/m1m1m1m1/1m1m1m1m/m1m1m1m1"
EMPTY_POSITION = "/".join(["8"] * BOARD_SIZE)


def is_valid_position(position: str) -> bool:
    """Check the row count, the characters used, and that pieces only stand on dark cells."""
    rows = position.split("/")
    if len(rows) != BOARD_SIZE:
        return False

    for row, row_notation in enumerate(rows):
        column = 0
        for character in row_notation:
            if character.isdigit():
                empty_count = int(character)
                if empty_count == 0:
                    return False
                column += empty_count
            elif character.lower() in NOTATION_TO_RANK:
                if not Cell(column, row).is_dark():
                    return False
                column += 1
            else:
                # immediately invalidate if the character is anything else
                return False

            if column > BOARD_SIZE:
                return False

        if column != BOARD_SIZE:
            return False
    return True


def is_valid_cell_name(name: str) -> bool:
    """'a1' through 'h8'"""
    if len(name) != 2:
        return False
    column_char, row_char = name[0], name[1]
    if not (column_char.lower() in ascii_lowercase and row_char.isdigit()):
        return False
    return Cell.from_algebraic(name).is_within_bounds()
