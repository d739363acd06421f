"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.layout import is_valid_layout
from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status

# (row, col), zero-indexed. Row 0 is black's back rank.
Coordinates = tuple[int, int]

PROMOTABLE_TYPES = {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    starting_layout: Optional[list[str]] = None
    # side to move, with or without a layout. None: the configured starting turn
    turn: Optional[Color] = None

    @field_validator("starting_layout")
    @classmethod
    def validate_starting_layout(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return value

        if not is_valid_layout(value):
            raise InvalidRequestError(
                f"Layout must be {BOARD_DIMENSIONS[0]} rows of {BOARD_DIMENSIONS[1]} piece letters or '.'"
            )
        return value


class MoveRequest(BaseModel):
    origin: Coordinates
    destination: Coordinates
    promote_to: Optional[PieceType] = None

    @field_validator(*["origin", "destination"])
    @classmethod
    def validate_coordinates(cls, value: Coordinates) -> Coordinates:
        def _is_on_the_board(value: Coordinates) -> bool:
            row, col = value
            return (0 <= row < BOARD_DIMENSIONS[0]) and (0 <= col < BOARD_DIMENSIONS[1])

        if not _is_on_the_board(value):
            raise InvalidRequestError(f"Square {value!r} is not on the board.")
        return value

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value is not None and value not in PROMOTABLE_TYPES:
            raise InvalidRequestError(f"A pawn cannot promote into a {value}.")
        return value


class LegalMovesRequest(BaseModel):
    """Leave out the origin to get the moves of every piece."""

    origin: Optional[Coordinates] = None


# --- RESPONSE MODELS ---
class MoveModel(BaseModel):
    origin: Coordinates
    destination: Coordinates
    is_capture: bool = False
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False


class GameResponse(BaseModel):
    board: list[str]
    turn: Color
    status: Status
    winner: Optional[Color]
    in_check: bool
    en_passant_target: Optional[Coordinates]
    castling_rights: dict[str, bool]
    history_length: int


class LegalMovesResponse(BaseModel):
    color: Color
    legal_moves: list[MoveModel]


class MoveResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    game: GameResponse
