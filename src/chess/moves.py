"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the candidate (pseudo-legal) move sets for each piece type.


Legality (not leaving your own king attacked) is checked later, in legality.py
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.chess.attacks import (
    DIAGONALS,
    KING_DELTAS,
    KNIGHT_DELTAS,
    PAWN_DIRECTION,
    STRAIGHTS,
    Vector,
    is_any_attacked,
)
from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, CastlingDirection, castling_directions
from src.chess.pieces import Color, Piece, PieceType, opposite
from src.chess.square import BOARD_DIMENSIONS, Square

# Row a pawn starts from (and may push two squares from), and the row it promotes on.
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: BOARD_DIMENSIONS[0] - 2, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_DIMENSIONS[0] - 1}


@dataclass(frozen=True)
class Move:
    """
    basic definition of a move to be made

    The flags are filled in by the generator, which has the board at hand.
    NOTE: The piece type to promote into is not part of the move. The mover supplies it when the move gets applied.
    """

    origin: Square
    destination: Square
    is_capture: bool = False
    is_double_push: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    castling_direction: Optional[CastlingDirection] = None

    @property
    def is_castling(self) -> bool:
        return self.castling_direction is not None

    def describe(self) -> str:
        """For log messages, ex. 'e2-e4'"""
        return f"{self.origin.to_algebraic()}-{self.destination.to_algebraic()}"


def _plain_move(square: Square, target_square: Square, board: Board) -> Move:
    return Move(square, target_square, is_capture=not board.is_empty(target_square))


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    player_color = board.piece(square).color

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            piece_found = board.piece(target_square)
            if piece_found is not None:
                # only the first occupied square counts, and only if the opponent's: then it can be captured.
                if piece_found.color != player_color:
                    moves.append(Move(square, target_square, is_capture=True))
                break

            moves.append(Move(square, target_square))
            target_square = target_square.offset(d_row, d_col)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = board.piece(square).color

    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece(target_square)
        if piece_found is None or piece_found.color != player_color:
            moves.append(_plain_move(square, target_square, board))
    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally
    - takes en passant, on the square the opponent's pawn skipped over on the previous move
    """
    player_color = board.piece(square).color
    direction = PAWN_DIRECTION[player_color]
    promotes = PROMOTION_ROW[player_color] == square.row + direction

    moves: list[Move] = []

    # Pawn pushes
    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        moves.append(Move(square, one_step, is_promotion=promotes))

        two_steps = square.offset(2 * direction, 0)
        if square.row == PAWN_START_ROW[player_color] and board.is_empty(two_steps):
            moves.append(Move(square, two_steps, is_double_push=True))

    # pawns take diagonally
    for d_col in (-1, 1):
        target_square = square.offset(direction, d_col)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece(target_square)
        if piece_found is not None and piece_found.color != player_color:
            moves.append(
                Move(square, target_square, is_capture=True, is_promotion=promotes)
            )
        elif piece_found is None and _is_en_passant_capture(square, target_square, board):
            moves.append(
                Move(square, target_square, is_capture=True, is_en_passant=True)
            )
    return moves


def _is_en_passant_capture(square: Square, target_square: Square, board: Board) -> bool:
    """
    The target is the en passant square, and the opponent's pawn that skipped over it stands right next to us.
    (it stands on our row, in the target's column)
    """
    if target_square != board.en_passant_target:
        return False
    player_color = board.piece(square).color
    skipped_pawn = Piece(PieceType.PAWN, opposite(player_color))
    return board.piece(Square(square.row, target_square.col)) == skipped_pawn


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(square, board) + candidate_bishop_moves(square, board)


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move of two squares towards the rook.
    """
    return single_step_move(square, board, KING_DELTAS) + castling_moves(square, board)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# -- CASTLING MOVES ---
def can_castle(board: Board, direction: CastlingDirection) -> bool:
    """
    **you are allowed to castle if**

    * Castling rights are not yet revoked (and king and rook are where they started).
    * All squares in between king and rook are empty.
    * The king does not start on, pass through or land on a square that is under attack.
      (So you cannot castle out of check either.)
    """
    if not board.castling_rights.allows(direction):
        return False

    rule = CASTLING_RULES[direction]
    color = direction.color
    if board.piece(rule.king_from) != Piece(PieceType.KING, color):
        return False
    if board.piece(rule.rook_from) != Piece(PieceType.ROOK, color):
        return False

    if board.is_any_occupied(rule.between):
        return False

    return not is_any_attacked(board, rule.king_path, opposite(color))


def castling_moves(square: Square, board: Board) -> list[Move]:
    """Kingside first, then queenside."""
    color = board.piece(square).color
    if not board.castling_rights.has_any(color):
        return []
    return [
        Move(
            CASTLING_RULES[direction].king_from,
            CASTLING_RULES[direction].king_to,
            castling_direction=direction,
        )
        for direction in castling_directions(color)
        if CASTLING_RULES[direction].king_from == square and can_castle(board, direction)
    ]


# --- ENTRYPOINTS ---
def pseudo_moves(board: Board, square: Square) -> list[Move]:
    """All candidate moves of the piece on `square`. Not filtered for leaving your own king attacked."""
    piece = board.piece(square)
    if piece is None:
        return []
    movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
    return movement_rule(square, board)


def pseudo_moves_for_color(board: Board, color: Color) -> list[Move]:
    """Row-major by origin square, then in the order each rule generates them."""
    candidate_moves: list[Move] = []
    for starting_square in board.locate_color(color):
        candidate_moves.extend(pseudo_moves(board, starting_square))
    return candidate_moves
