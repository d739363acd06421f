"""
Attack rules: "is this square in the line of fire of the given color?"

Every rule starts at the square under investigation and looks outward for an attacker.
Nothing in here calls the move generator: castling needs to know about attacked squares,
and legality needs to know about the king being attacked, so going through move generation would recurse.
"""

import logging
from typing import Callable, Optional

from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType, opposite
from src.chess.square import Square

logger = logging.getLogger(__name__)

Vector = tuple[int, int]

KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = [
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
]
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]

# White pawns move up the board (towards row 0), black pawns move down.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}


def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_types: frozenset[PieceType],
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Walk along every direction until hitting a piece or the edge of the board.
    Only the first piece found along a ray can be the attacker, and it only counts if it has the right color
    and is allowed to move along that ray.
    """
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            piece_found = board.piece(target_square)
            if piece_found is not None:
                if piece_found.color == by_color and piece_found.type in by_piece_types:
                    return True
                break
            target_square = target_square.offset(d_row, d_col)
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """
    Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights that just reach a single square along a direction.
    Blockers in between do not matter.
    """
    attacker = Piece(by_piece_type, by_color)
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if target_square.is_within_bounds() and board.piece(target_square) == attacker:
            return True
    return False


def is_attacked_by_pawn(square: Square, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric. A white pawn takes towards row 0, so a white pawn attacking this square
    stands one row FURTHER from row 0. Hence, the vectors are the opposite of the pawn's capture direction.
    """
    behind = -PAWN_DIRECTION[by_color]
    return single_step_attack(
        square, by_color, PieceType.PAWN, board, [(behind, -1), (behind, 1)]
    )


def is_attacked_by_knight(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_king(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KING, board, KING_DELTAS)


def is_attacked_along_straights(square: Square, by_color: Color, board: Board) -> bool:
    """Rooks and queens"""
    return raycasting_attack(
        square, by_color, frozenset({PieceType.ROOK, PieceType.QUEEN}), board, STRAIGHTS
    )


def is_attacked_along_diagonals(square: Square, by_color: Color, board: Board) -> bool:
    """Bishops and queens"""
    return raycasting_attack(
        square, by_color, frozenset({PieceType.BISHOP, PieceType.QUEEN}), board, DIAGONALS
    )


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Board], bool]
ATTACK_RULES: tuple[IsAttackedFn, ...] = (
    is_attacked_by_pawn,
    is_attacked_by_knight,
    is_attacked_by_king,
    is_attacked_along_straights,
    is_attacked_along_diagonals,
)


def is_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """
    Could a piece of `by_color` capture on `square` with its next move?

    Ignores whose turn it is and whether that capture would be legal itself.
    """
    return any(rule(square, by_color, board) for rule in ATTACK_RULES)


def is_any_attacked(board: Board, squares: list[Square], by_color: Color) -> bool:
    return any(is_attacked(board, square, by_color) for square in squares)


def find_king(board: Board, color: Color) -> Optional[Square]:
    """There should be exactly one. Anything else is a malformed position."""
    king_squares = board.locate_pieces(Piece(PieceType.KING, color))
    return king_squares[0] if king_squares else None


def is_in_check(board: Board, color: Color) -> bool:
    """
    King of `color` is attacked by the opponent.

    A missing king counts as being in check.
    """
    king_square = find_king(board, color)
    if king_square is None:
        logger.warning("No %s king on the board, treating position as check", color.name.lower())
        return True
    return is_attacked(board, king_square, opposite(color))
