"""
Legal moves: candidate moves that do not put (or leave) your own king under attack.

Every candidate move gets played out on the (immutable) board, then we check if the mover's king is attacked afterwards.
"""

from src.chess.applier import apply_move, needs_promotion
from src.chess.attacks import is_in_check
from src.chess.board import Board
from src.chess.moves import Move, pseudo_moves_for_color
from src.chess.pieces import Color, PieceType

# Promotions are played out as a queen while testing legality. The piece type never changes whether your own king is attacked.
SIMULATED_PROMOTION = PieceType.QUEEN


def simulate(board: Board, move: Move) -> Board:
    """Play out the move for testing purposes only."""
    promotion = SIMULATED_PROMOTION if needs_promotion(board, move) else None
    return apply_move(board, move, promotion)


def is_putting_yourself_in_check(board: Board, move: Move, color: Color) -> bool:
    return is_in_check(simulate(board, move), color)


def legal_moves(board: Board, color: Color) -> list[Move]:
    """
    List of legal moves for the player with the 'color' pieces
    ----

    1. generate candidate moves, using the movement rules for all pieces (castling and en passant included)
    2. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.

    Same order as the candidate moves.
    """
    return [
        move
        for move in pseudo_moves_for_color(board, color)
        if not is_putting_yourself_in_check(board, move, color)
    ]


def has_legal_move(board: Board, color: Color) -> bool:
    """Stops at the first legal move found"""
    return any(
        not is_putting_yourself_in_check(board, move, color)
        for move in pseudo_moves_for_color(board, color)
    )
