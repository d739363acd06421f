"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable, Optional

import pytest

from src.chess.board import Board
from src.chess.castling import CastlingRights
from src.chess.layout import EMPTY_MARKER
from src.chess.pieces import Color
from src.chess.square import BOARD_DIMENSIONS, Square

BoardFactory = Callable[..., Board]


def layout_with(pieces: dict[str, str]) -> list[str]:
    """Build the text layout of a board holding only the given pieces, ex. {"e1": "K", "e8": "k"}"""
    rows = [[EMPTY_MARKER] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]
    for square_name, character in pieces.items():
        square = Square.from_algebraic(square_name)
        rows[square.row][square.col] = character
    return ["".join(row) for row in rows]


@pytest.fixture
def board_with() -> BoardFactory:
    """Call the inner function with the pieces (square name -> piece letter) that should be on the board"""

    def _create_board(
        pieces: dict[str, str],
        turn: Color = Color.WHITE,
        castling_rights: Optional[CastlingRights] = None,
        en_passant: Optional[str] = None,
    ) -> Board:
        en_passant_target = Square.from_algebraic(en_passant) if en_passant else None
        return Board.from_layout(
            layout_with(pieces),
            turn=turn,
            castling_rights=castling_rights,
            en_passant_target=en_passant_target,
        )

    return _create_board


@pytest.fixture
def castling_board(board_with: BoardFactory) -> Board:
    """Only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return board_with(
        {"e1": "K", "a1": "R", "h1": "R", "e8": "k", "a8": "r", "h8": "r"}
    )
