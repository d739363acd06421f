"""
Type definitions used across layers
"""

from enum import StrEnum

# --- The domain layer has its own Color / PieceType / Status enums (see src/chess). These string-valued versions
# --- are what crosses the boundary.


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
