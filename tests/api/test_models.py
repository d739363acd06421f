"""Unit tests for src/api/models.py"""

import pytest
from pydantic import ValidationError

from src.api.models import LegalMovesRequest, MoveRequest, NewGameRequest
from src.chess.layout import STARTING_LAYOUT
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType


# -- Validation - NewGameRequest --
def test_valid_layout() -> None:
    """Test that NewGameRequest accepts a valid layout."""
    request = NewGameRequest(starting_layout=list(STARTING_LAYOUT), turn=Color.BLACK)
    assert request.starting_layout == list(STARTING_LAYOUT)
    assert request.turn == Color.BLACK


def test_starting_layout_is_optional() -> None:
    """Should be able to not supply a starting layout, and validator just returns None."""
    request = NewGameRequest()
    assert request.starting_layout is None
    assert request.turn is None


@pytest.mark.parametrize(
    "invalid_layout",
    [
        list(STARTING_LAYOUT[:7]),  # missing a row
        ["rnbqkbnr", "pppppppp", "8", "8", "8", "8", "PPPPPPPP", "RNBQKBNR"],  # FEN digits
        ["rnbqkbnr"] * 7 + ["RNBQKBNX"],  # unknown piece letter
    ],
)
def test_invalid_layout(invalid_layout: list[str]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = NewGameRequest(starting_layout=invalid_layout)


def test_turn_from_string() -> None:
    assert NewGameRequest(turn="black").turn == Color.BLACK


# -- Validation - MoveRequest --
def test_valid_coordinates() -> None:
    """Test that MoveRequest accepts (row, col) pairs on the board."""
    request = MoveRequest(origin=(6, 4), destination=(4, 4))
    assert request.origin == (6, 4)
    assert request.destination == (4, 4)
    assert request.promote_to is None


@pytest.mark.parametrize(
    "origin, destination",
    [
        ((8, 4), (4, 4)),
        ((6, 4), (4, -1)),
        ((-1, 0), (0, 0)),
        ((0, 0), (0, 8)),
    ],
)
def test_coordinates_off_the_board(
    origin: tuple[int, int], destination: tuple[int, int]
) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(origin=origin, destination=destination)


def test_coordinates_must_be_pairs() -> None:
    """Shape is checked by pydantic itself, before our validators run."""
    with pytest.raises(ValidationError):
        _ = MoveRequest(origin=(6, 4, 1), destination=(4, 4))


@pytest.mark.parametrize(
    "piece_type", [PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT]
)
def test_valid_promotion(piece_type: PieceType) -> None:
    request = MoveRequest(origin=(1, 0), destination=(0, 0), promote_to=piece_type)
    assert request.promote_to == piece_type


@pytest.mark.parametrize("piece_type", [PieceType.KING, PieceType.PAWN])
def test_invalid_promotion(piece_type: PieceType) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(origin=(1, 0), destination=(0, 0), promote_to=piece_type)


def test_promotion_from_string() -> None:
    request = MoveRequest(origin=(1, 0), destination=(0, 0), promote_to="knight")
    assert request.promote_to == PieceType.KNIGHT


# -- LegalMovesRequest --
def test_legal_moves_request() -> None:
    assert LegalMovesRequest().origin is None
    assert LegalMovesRequest(origin=(7, 6)).origin == (7, 6)
