"""
Applying a move to a Board.

The Board is immutable, so applying a move means building the next Board:
pieces are relocated, and the state that carries over (turn, castling rights, en passant target) is derived from the move.
"""

from typing import Optional

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, ROOK_CORNERS, CastlingDirection, CastlingRights
from src.chess.moves import PROMOTION_ROW, Move
from src.chess.pieces import PROMOTION_OPTIONS, Piece, PieceType, opposite
from src.chess.square import Square
from src.core.exceptions import (
    IllegalMoveError,
    InvalidPromotionError,
    PromotionRequiredError,
)


def is_en_passant(board: Board, move: Move) -> bool:
    """A pawn moving diagonally onto the (empty) en passant square"""
    piece = board.piece(move.origin)
    return (
        piece is not None
        and piece.type == PieceType.PAWN
        and move.destination == board.en_passant_target
        and move.origin.col != move.destination.col
        and board.is_empty(move.destination)
    )


def en_passant_capture_square(move: Move) -> Square:
    """The pawn taken en passant is NOT on the destination: it is next to the capturing pawn (same row as the origin)."""
    return Square(move.origin.row, move.destination.col)


def needs_promotion(board: Board, move: Move) -> bool:
    piece = board.piece(move.origin)
    return (
        piece is not None
        and piece.type == PieceType.PAWN
        and move.destination.row == PROMOTION_ROW[piece.color]
    )


def captured_piece(board: Board, move: Move) -> Optional[Piece]:
    """What (if anything) disappears from the board by making this move."""
    if is_en_passant(board, move):
        return board.piece(en_passant_capture_square(move))
    return board.piece(move.destination)


def castling_direction_of(move: Move) -> Optional[CastlingDirection]:
    """A king moving two squares sideways from its original square"""
    for direction, rule in CASTLING_RULES.items():
        if move.origin == rule.king_from and move.destination == rule.king_to:
            return direction
    return None


def _next_en_passant_target(board: Board, move: Move) -> Optional[Square]:
    """The square skipped over by a double pawn push. Only valid on the next ply."""
    piece = board.piece(move.origin)
    rows_moved = abs(move.destination.row - move.origin.row)
    if piece.type == PieceType.PAWN and rows_moved == 2:
        return Square((move.origin.row + move.destination.row) // 2, move.origin.col)
    return None


def _revoke_castling_rights(
    rights: CastlingRights, piece: Piece, move: Move
) -> CastlingRights:
    """
    Checks which rights should get revoked
    ----

    1. If you are moving your king (castling included) --> revoke both
    2. If a rook leaves its original corner --> revoke the right for that corner
    3. If anything lands on an original corner (capturing the rook there) --> revoke the right for that corner
    """
    if piece.type == PieceType.KING:
        rights = rights.revoke_all(piece.color)

    if piece.type == PieceType.ROOK and move.origin in ROOK_CORNERS:
        rights = rights.revoke(ROOK_CORNERS[move.origin])

    if move.destination in ROOK_CORNERS:
        rights = rights.revoke(ROOK_CORNERS[move.destination])
    return rights


def apply_move(
    board: Board, move: Move, promotion: Optional[PieceType] = None
) -> Board:
    """
    Produce the Board after `move`.
    ---

    `promotion` is required exactly when a pawn reaches the last row. Without it the move cannot be finalized,
    and nothing is produced (PromotionRequiredError).
    """
    piece = board.piece(move.origin)
    if piece is None:
        raise IllegalMoveError(f"No piece to move on {move.origin.to_algebraic()}")

    placements: dict[Square, Optional[Piece]] = {move.origin: None}
    en_passant_target = _next_en_passant_target(board, move)
    castling_rights = _revoke_castling_rights(board.castling_rights, piece, move)

    # take en passant: remove the pawn that skipped over the destination square
    if is_en_passant(board, move):
        placements[en_passant_capture_square(move)] = None

    # castling: the rook jumps over the king
    if piece.type == PieceType.KING:
        direction = castling_direction_of(move)
        if direction is not None:
            rule = CASTLING_RULES[direction]
            placements[rule.rook_from] = None
            placements[rule.rook_to] = board.piece(rule.rook_from)

    # promotion: the pawn is replaced by the chosen piece
    if needs_promotion(board, move):
        if promotion is None:
            raise PromotionRequiredError(
                f"Pawn move {move.describe()} needs a piece type to promote into"
            )
        if promotion not in PROMOTION_OPTIONS:
            raise InvalidPromotionError(f"A pawn cannot promote into a {promotion.name.lower()}")
        piece = piece.promoted_to(promotion)

    placements[move.destination] = piece

    return board.with_changes(
        placements,
        turn=opposite(board.turn),
        en_passant_target=en_passant_target,
        castling_rights=castling_rights,
    )
