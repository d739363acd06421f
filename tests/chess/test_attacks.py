"""Unit tests for /src/chess/attacks.py"""

from typing import Callable
from unittest.mock import MagicMock, patch

import pytest

import src.chess.attacks as atk
from src.chess.attacks import (
    DIAGONALS,
    STRAIGHTS,
    find_king,
    is_attacked,
    is_attacked_along_diagonals,
    is_attacked_along_straights,
    is_attacked_by_king,
    is_attacked_by_knight,
    is_attacked_by_pawn,
    is_in_check,
    raycasting_attack,
    single_step_attack,
)
from src.chess.board import Board
from src.chess.pieces import Color, PieceType
from src.chess.square import Square

BoardFactory = Callable[..., Board]
ROOK_OR_QUEEN = frozenset({PieceType.ROOK, PieceType.QUEEN})


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


# --- RAYCASTING ---
def test_raycasting_attack_empty_board(board_with: BoardFactory) -> None:
    """Sanity check: with the board empty, no square should be under attack."""
    board = board_with({})
    assert not raycasting_attack(sq("a5"), Color.WHITE, ROOK_OR_QUEEN, board, STRAIGHTS)
    assert not raycasting_attack(sq("a5"), Color.BLACK, ROOK_OR_QUEEN, board, DIAGONALS)


def test_raycasting_attack_w_attacker_on_same_file(board_with: BoardFactory) -> None:
    """Black rook on a8 attacks the a-file"""
    board = board_with({"a8": "r"})
    assert raycasting_attack(sq("a1"), Color.BLACK, ROOK_OR_QUEEN, board, STRAIGHTS)
    assert raycasting_attack(sq("a5"), Color.BLACK, ROOK_OR_QUEEN, board, STRAIGHTS)
    assert not raycasting_attack(sq("b5"), Color.BLACK, ROOK_OR_QUEEN, board, STRAIGHTS)


def test_raycasting_attack_w_blocker_on_same_file(board_with: BoardFactory) -> None:
    """Anything in between blocks the line of sight. Only the first piece on a ray matters."""
    board = board_with({"a8": "r", "a6": "P"})
    assert raycasting_attack(sq("a6"), Color.BLACK, ROOK_OR_QUEEN, board, STRAIGHTS)
    assert not raycasting_attack(sq("a5"), Color.BLACK, ROOK_OR_QUEEN, board, STRAIGHTS)

    # own piece blocks as well
    board = board_with({"a8": "r", "a6": "p"})
    assert not raycasting_attack(sq("a5"), Color.BLACK, ROOK_OR_QUEEN, board, STRAIGHTS)


def test_raycasting_attack_wrong_color(board_with: BoardFactory) -> None:
    board = board_with({"a8": "r"})
    assert not raycasting_attack(sq("a1"), Color.WHITE, ROOK_OR_QUEEN, board, STRAIGHTS)


def test_raycasting_attack_wrong_piece_type(board_with: BoardFactory) -> None:
    """A bishop on the same file does not attack along that file"""
    board = board_with({"a8": "b"})
    assert not raycasting_attack(sq("a1"), Color.BLACK, ROOK_OR_QUEEN, board, STRAIGHTS)


# --- SINGLE STEP ---
def test_single_step_attack_blocker_does_not_matter(board_with: BoardFactory) -> None:
    """Knights jump: surrounding d4 with pieces does not stop the knight on e6"""
    board = board_with(
        {"e6": "n", "d5": "P", "e5": "P", "c5": "P", "c4": "P", "e4": "P", "d3": "P"}
    )
    assert single_step_attack(sq("d4"), Color.BLACK, PieceType.KNIGHT, board, atk.KNIGHT_DELTAS)


def test_single_step_attack_wrong_type_or_color(board_with: BoardFactory) -> None:
    board = board_with({"e6": "N"})
    assert not single_step_attack(sq("d4"), Color.BLACK, PieceType.KNIGHT, board, atk.KNIGHT_DELTAS)
    assert not single_step_attack(sq("d4"), Color.WHITE, PieceType.BISHOP, board, atk.KNIGHT_DELTAS)


# --- PER PIECE ---
@pytest.mark.parametrize(
    "target, attacked",
    [("c5", True), ("e5", True), ("d5", False), ("c3", False), ("e3", False)],
)
def test_white_pawn_attack(board_with: BoardFactory, target: str, attacked: bool) -> None:
    """White pawn on d4 attacks c5 and e5: diagonally, and only forward (up the board)"""
    board = board_with({"d4": "P"})
    assert is_attacked_by_pawn(sq(target), Color.WHITE, board) == attacked


@pytest.mark.parametrize(
    "target, attacked",
    [("c3", True), ("e3", True), ("d3", False), ("c5", False), ("e5", False)],
)
def test_black_pawn_attack(board_with: BoardFactory, target: str, attacked: bool) -> None:
    """Black pawn on d4 attacks c3 and e3 (down the board)"""
    board = board_with({"d4": "p"})
    assert is_attacked_by_pawn(sq(target), Color.BLACK, board) == attacked


def test_pawn_push_square_is_not_attacked(board_with: BoardFactory) -> None:
    """A pawn can move forward, but it cannot capture there"""
    board = board_with({"d4": "P"})
    assert not is_attacked(board, sq("d5"), Color.WHITE)


def test_knight_attack(board_with: BoardFactory) -> None:
    board = board_with({"d4": "N"})
    attacked = {square for square in board.squares() if is_attacked_by_knight(square, Color.WHITE, board)}
    assert attacked == {sq(name) for name in ["b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"]}


def test_king_attack(board_with: BoardFactory) -> None:
    board = board_with({"a1": "k"})
    attacked = {square for square in board.squares() if is_attacked_by_king(square, Color.BLACK, board)}
    assert attacked == {sq("a2"), sq("b1"), sq("b2")}


@pytest.mark.parametrize(
    "piece, straight, diagonal",
    [("R", True, False), ("B", False, True), ("Q", True, True), ("N", False, False)],
)
def test_slider_geometry(board_with: BoardFactory, piece: str, straight: bool, diagonal: bool) -> None:
    """Credit the first piece on a ray only if it moves along that kind of ray"""
    board = board_with({"d4": piece})
    assert is_attacked_along_straights(sq("d8"), Color.WHITE, board) == straight
    assert is_attacked_along_diagonals(sq("h8"), Color.WHITE, board) == diagonal


def test_is_attacked_uses_all_rules(board_with: BoardFactory) -> None:
    """Check wiring: every attack rule gets consulted when none of them finds an attacker"""
    board = board_with({})
    mocks = tuple(MagicMock(return_value=False) for _ in atk.ATTACK_RULES)

    with patch.object(atk, "ATTACK_RULES", mocks):
        assert not is_attacked(board, sq("d4"), Color.WHITE)

    for mock in mocks:
        mock.assert_called_once_with(sq("d4"), Color.WHITE, board)


def test_is_attacked_stops_at_first_hit(board_with: BoardFactory) -> None:
    board = board_with({})
    first, second = MagicMock(return_value=True), MagicMock(return_value=False)

    with patch.object(atk, "ATTACK_RULES", (first, second)):
        assert is_attacked(board, sq("d4"), Color.BLACK)

    second.assert_not_called()


def test_is_attacked_ignores_turn(board_with: BoardFactory) -> None:
    """Attacks are geometry only: black's rook attacks e1 even with white to move"""
    board = board_with({"e8": "r"}, turn=Color.WHITE)
    assert is_attacked(board, sq("e1"), Color.BLACK)


# --- KING LOCATOR / CHECK ---
def test_find_king(board_with: BoardFactory) -> None:
    board = board_with({"g1": "K", "c7": "k"})
    assert find_king(board, Color.WHITE) == sq("g1")
    assert find_king(board, Color.BLACK) == sq("c7")


def test_find_king_missing(board_with: BoardFactory) -> None:
    board = board_with({"g1": "K"})
    assert find_king(board, Color.BLACK) is None


def test_is_in_check(board_with: BoardFactory) -> None:
    board = board_with({"e1": "K", "e8": "k", "b4": "b"})
    assert is_in_check(board, Color.WHITE)
    assert not is_in_check(board, Color.BLACK)


def test_pinned_attacker_still_gives_check(board_with: BoardFactory) -> None:
    """Raw geometry: whether the attacker could legally capture does not matter"""
    # black knight on d3 is pinned against its own king by the white rook, but still attacks e1
    board = board_with({"e1": "K", "d3": "n", "d8": "k", "d1": "R"})
    assert is_in_check(board, Color.WHITE)


def test_missing_king_counts_as_check(board_with: BoardFactory) -> None:
    board = board_with({"e8": "k"})
    assert is_in_check(board, Color.WHITE)
