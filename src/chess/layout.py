"""
Text serialization of the squares on the board.

8 rows of 8 characters. The first row is Black's back rank, so the standard starting layout reads:

    rnbqkbnr
    pppppppp
    ........
    ........
    ........
    ........
    PPPPPPPP
    RNBQKBNR

Upper case letters are the white pieces, lower case the black pieces, and a '.' marks an empty square.
"""

from typing import Optional, Sequence

from src.chess.pieces import CHAR_TO_PIECE, Piece
from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidLayoutError

EMPTY_MARKER = "."

STARTING_LAYOUT: tuple[str, ...] = (
    "rnbqkbnr",
    "pppppppp",
    "........",
    "........",
    "........",
    "........",
    "PPPPPPPP",
    "RNBQKBNR",
)

EMPTY_LAYOUT: tuple[str, ...] = tuple([EMPTY_MARKER * BOARD_DIMENSIONS[1]] * BOARD_DIMENSIONS[0])

Layout = str | Sequence[str]
Grid = tuple[tuple[Optional[Piece], ...], ...]


def split_layout(layout: Layout) -> list[str]:
    """A layout is either a sequence of rows or a single string with rows separated by '/' or new lines."""
    if isinstance(layout, str):
        separator = "/" if "/" in layout else "\n"
        return [row.strip() for row in layout.strip().split(separator)]
    return list(layout)


def is_valid_layout(layout: Layout) -> bool:
    """Correct number of rows, each with the correct number of known characters."""
    num_rows, num_cols = BOARD_DIMENSIONS
    rows = split_layout(layout)
    if len(rows) != num_rows:
        return False

    for row in rows:
        if len(row) != num_cols:
            return False
        # immediately invalidate if any character is not a piece / empty marker
        if any(
            character != EMPTY_MARKER and character.lower() not in CHAR_TO_PIECE
            for character in row
        ):
            return False
    return True


def parse_layout(layout: Layout) -> Grid:
    """Convert the text layout into an immutable grid of pieces (None for an empty square)."""
    if not is_valid_layout(layout):
        raise InvalidLayoutError(f"Cannot interpret supplied layout as a board: {layout!r}")

    return tuple(
        tuple(
            None if character == EMPTY_MARKER else Piece.from_char(character)
            for character in row
        )
        for row in split_layout(layout)
    )


def format_layout(grid: Grid) -> list[str]:
    """Reverse operation: one string per row."""
    return [
        "".join(EMPTY_MARKER if piece is None else piece.to_char() for piece in row)
        for row in grid
    ]
