"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8 (rows, cols).
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """
    Zero-indexed (row, col) address.

    Row 0 is the back rank of the side listed first in the layout (Black, the 8th rank),
    col 0 is the a-file. So 'a8' is (0, 0) and 'h1' is (7, 7).
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Square names: 'a8' -> (0, 0), 'e2' -> (6, 4), 'h1' -> (7, 7)"""
        col = ord(sq[0]) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square displaced by the given vector. May land outside the board."""
        return Square(self.row + d_row, self.col + d_col)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)
