"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Self

from src.chess.pieces import Color
from src.chess.square import Square


class CastlingDirection(Enum):
    """The four castling directions. Values are the one-letter names used when the rights get serialized."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"

    @property
    def color(self) -> Color:
        return Color.WHITE if self.value.isupper() else Color.BLACK


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: Rights can be supplied together with a layout, so move generation still checks that king and rook stand on these squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    @property
    def between(self) -> list[Square]:
        """Squares strictly between king and rook. All of them must be empty to castle."""
        step = 1 if self.rook_from.col > self.king_from.col else -1
        return [
            Square(self.king_from.row, col)
            for col in range(self.king_from.col + step, self.rook_from.col, step)
        ]

    @property
    def king_path(self) -> list[Square]:
        """Start, transit and destination square of the king. None of them may be attacked."""
        step = 1 if self.king_to.col > self.king_from.col else -1
        return [
            Square(self.king_from.row, col)
            for col in range(self.king_from.col, self.king_to.col + step, step)
        ]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}

# Corner square -> the right that is lost once that corner is vacated (or captured on)
ROOK_CORNERS: dict[Square, CastlingDirection] = {
    rule.rook_from: direction for direction, rule in CASTLING_RULES.items()
}


def castling_directions(color: Color) -> list[CastlingDirection]:
    """Kingside first, then queenside."""
    return [direction for direction in CastlingDirection if direction.color == color]


@dataclass(frozen=True)
class CastlingRights:
    """
    Per-color {kingside, queenside} flags.
    ----

    Rights only ever decay: every method hands back a new (equal or smaller) set of rights.
    """

    white_king_side: bool = True
    white_queen_side: bool = True
    black_king_side: bool = True
    black_queen_side: bool = True

    @classmethod
    def none(cls) -> Self:
        return cls(False, False, False, False)

    def allows(self, direction: CastlingDirection) -> bool:
        return getattr(self, direction.name.lower())

    def has_any(self, color: Color) -> bool:
        return any(self.allows(direction) for direction in castling_directions(color))

    def revoke(self, *directions: CastlingDirection) -> Self:
        return replace(self, **{direction.name.lower(): False for direction in directions})

    def revoke_all(self, color: Color) -> Self:
        return self.revoke(*castling_directions(color))

    def as_dict(self) -> dict[CastlingDirection, bool]:
        return {direction: self.allows(direction) for direction in CastlingDirection}
