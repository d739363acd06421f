"""
The Board is an immutable snapshot of a position: where the pieces are, whose turn it is,
and the state that carries over between moves (castling rights, en passant target).
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping, Optional, Self

from src.chess.castling import CASTLING_RULES, CastlingRights
from src.chess.layout import STARTING_LAYOUT, Grid, Layout, format_layout, parse_layout
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square


def infer_castling_rights(grid: Grid) -> CastlingRights:
    """
    For a freshly loaded layout: a right is kept only if the king and that rook still stand on their original squares.
    """
    rights = CastlingRights()
    for direction, rule in CASTLING_RULES.items():
        king = Piece(PieceType.KING, direction.color)
        rook = Piece(PieceType.ROOK, direction.color)
        king_in_place = grid[rule.king_from.row][rule.king_from.col] == king
        rook_in_place = grid[rule.rook_from.row][rule.rook_from.col] == rook
        if not (king_in_place and rook_in_place):
            rights = rights.revoke(direction)
    return rights


@dataclass(frozen=True)
class Board:
    grid: Grid
    turn: Color = Color.WHITE
    en_passant_target: Optional[Square] = None
    castling_rights: CastlingRights = field(default_factory=CastlingRights)

    @classmethod
    def from_layout(
        cls,
        layout: Layout,
        turn: Color = Color.WHITE,
        castling_rights: Optional[CastlingRights] = None,
        en_passant_target: Optional[Square] = None,
    ) -> Self:
        """
        Construct a board from its text layout (see layout.py).

        When no castling rights are given, they are inferred from where the kings and rooks stand.
        """
        grid = parse_layout(layout)
        rights = castling_rights if castling_rights is not None else infer_castling_rights(grid)
        return cls(grid, turn, en_passant_target, rights)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_layout(STARTING_LAYOUT)

    def to_layout(self) -> list[str]:
        return format_layout(self.grid)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def is_any_occupied(self, squares: Iterable[Square]) -> bool:
        return any(not self.is_empty(square) for square in squares)

    def squares(self) -> list[Square]:
        """Row-major order. Everything that scans the board relies on this order."""
        num_rows, num_cols = BOARD_DIMENSIONS
        return [Square(row, col) for row in range(num_rows) for col in range(num_cols)]

    def locate_pieces(self, piece: Piece) -> list[Square]:
        return [square for square in self.squares() if self.piece(square) == piece]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square in self.squares()
            if (piece := self.piece(square)) is not None and piece.color == color
        ]

    def with_changes(
        self,
        placements: Mapping[Square, Optional[Piece]],
        **state,
    ) -> Self:
        """
        New board with the given squares overwritten (None empties a square) and any of the state fields replaced.
        ---
        Rows that are not touched are shared with this board. They are tuples, so sharing is safe.
        """
        rows = list(self.grid)
        touched_rows = {square.row for square in placements}
        for row in touched_rows:
            cells = list(rows[row])
            for square, piece in placements.items():
                if square.row == row:
                    cells[square.col] = piece
            rows[row] = tuple(cells)
        return replace(self, grid=tuple(rows), **state)
