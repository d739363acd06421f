"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating a turn: offering the legal moves, applying the chosen one,
keeping the history of previous positions (for undo) and deciding if the game has ended.

It is the only place holding state that changes: the Board itself is immutable, the Game just points at the current one.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Protocol, Self

from src.chess.applier import apply_move, captured_piece
from src.chess.attacks import is_in_check
from src.chess.board import Board
from src.chess.layout import STARTING_LAYOUT, Layout
from src.chess.legality import legal_moves
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType, opposite
from src.chess.square import Square
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    PromotionRequiredError,
)
from src.core.models import GameModel

logger = logging.getLogger(__name__)

SquareLike = Square | tuple[int, int]


class Status(Enum):
    IN_PROGRESS = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass(frozen=True)
class GameStatus:
    status: Status
    winner: Optional[Color] = None

    @property
    def is_over(self) -> bool:
        return self.status != Status.IN_PROGRESS


@dataclass(frozen=True)
class HistoryEntry:
    """The position before a move, plus what happened in that move."""

    board: Board
    move: Move
    captured: Optional[Piece] = None
    promotion: Optional[PieceType] = None


class PromotionChooser(Protocol):
    """Whoever asks the player which piece a pawn turns into (a dialog, a default, ...)"""

    def __call__(self, color: Color) -> Optional[PieceType]: ...


def _as_square(square: SquareLike) -> Square:
    if isinstance(square, Square):
        return square
    if len(square) != 2:
        raise IllegalMoveError(f"Not a (row, col) pair: {square!r}")
    return Square(*square)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    history: list[HistoryEntry] = field(default_factory=list)
    choose_promotion: Optional[PromotionChooser] = None
    _legal_moves: list[Move] = field(init=False, repr=False, default_factory=list)
    _status: GameStatus = field(
        init=False, repr=False, default=GameStatus(Status.IN_PROGRESS)
    )

    def __post_init__(self) -> None:
        self._update_game_status()

    @classmethod
    def new_game(
        cls,
        starting_layout: Optional[Layout] = None,
        turn: Color = Color.WHITE,
        choose_promotion: Optional[PromotionChooser] = None,
    ) -> Self:
        """Start from the standard starting position, unless a layout is supplied. `turn` applies either way."""
        layout = starting_layout if starting_layout is not None else STARTING_LAYOUT
        return cls(board=Board.from_layout(layout, turn=turn), choose_promotion=choose_promotion)

    @classmethod
    def from_board(
        cls, board: Board, choose_promotion: Optional[PromotionChooser] = None
    ) -> Self:
        return cls(board=board, choose_promotion=choose_promotion)

    def reset(self, board: Optional[Board] = None) -> None:
        """New game: back to the given (or standard starting) position, history cleared."""
        self.board = board if board is not None else Board.starting_position()
        self.history.clear()
        self._update_game_status()
        logger.debug("Game reset")

    # --- QUERIES ---
    def current_state(self) -> Board:
        return self.board

    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status.is_over

    @property
    def winner(self) -> Optional[Color]:
        """Only a checkmate has a winner: the player who just moved."""
        return self._status.winner

    def is_in_check(self) -> bool:
        """Is the player to move in check?"""
        return is_in_check(self.board, self.board.turn)

    def legal_moves_for_current_turn(self) -> list[Move]:
        """Empty once the game is over."""
        if self.is_over:
            return []
        return list(self._legal_moves)

    def legal_destinations(self, origin: SquareLike) -> list[Square]:
        """Where the piece on `origin` may go. Handy for highlighting targets after selecting a piece."""
        origin = _as_square(origin)
        return [
            move.destination
            for move in self.legal_moves_for_current_turn()
            if move.origin == origin
        ]

    # --- COMMANDS ---
    def make_move(
        self,
        origin: SquareLike,
        destination: SquareLike,
        promotion_choice: Optional[PieceType] = None,
    ) -> Move:
        """
        Attempt to make a move
        -----

        1. make sure the game is (still) in progress
        2. check the move is among the legal moves
        3. pawn reaching the last row? --> get the piece type to promote into (from the caller, or by asking `choose_promotion`)
        4. update the board, and commit the position before the move to the history
        5. update game status (if needed)

        Raises a GameError (and changes nothing) when the move cannot be made.
        """
        if self.is_over:
            raise GameStateError(f"Game is not in progress. status: {self._status.status}")

        move = self._find_legal_move(_as_square(origin), _as_square(destination))
        promotion = self._resolve_promotion(move, promotion_choice)

        # nothing gets committed before the new board has been built
        captured = captured_piece(self.board, move)
        new_board = apply_move(self.board, move, promotion)

        self.history.append(HistoryEntry(self.board, move, captured, promotion))
        self.board = new_board
        logger.debug("Applied %s (%d moves in history)", move.describe(), len(self.history))

        self._update_game_status()
        return move

    def try_move(
        self,
        origin: SquareLike,
        destination: SquareLike,
        promotion_choice: Optional[PieceType] = None,
    ) -> bool:
        """Same as make_move, but a rejected move is reported as False instead of raised."""
        try:
            self.make_move(origin, destination, promotion_choice)
        except GameError as exc:
            logger.info("Move rejected: %s", exc)
            return False
        return True

    def undo(self) -> bool:
        """Back to the position before the last move. Nothing to undo is not an error: just returns False."""
        if not self.history:
            return False

        entry = self.history.pop()
        self.board = entry.board
        logger.debug("Undid %s", entry.move.describe())
        self._update_game_status()
        return True

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        winner = self.winner
        return GameModel(
            layout=self.board.to_layout(),
            turn=self.board.turn.name.lower(),
            castling_rights={
                direction.value: allowed
                for direction, allowed in self.board.castling_rights.as_dict().items()
            },
            en_passant_target=(
                self.board.en_passant_target.as_tuple()
                if self.board.en_passant_target is not None
                else None
            ),
            status=self._status.status.name.lower().replace("_", " "),
            winner=winner.name.lower() if winner is not None else None,
            in_check=self.is_in_check(),
            history_length=len(self.history),
        )

    # -- PRIVATE HELPERS ---
    def _find_legal_move(self, origin: Square, destination: Square) -> Move:
        for move in self._legal_moves:
            if move.origin == origin and move.destination == destination:
                return move
        raise IllegalMoveError(
            f"Move not allowed: {origin.as_tuple()} -> {destination.as_tuple()}"
        )

    def _resolve_promotion(
        self, move: Move, promotion_choice: Optional[PieceType]
    ) -> Optional[PieceType]:
        """
        Only a pawn reaching the last row needs a choice. Any choice passed along with another move is ignored.
        """
        if not move.is_promotion:
            return None

        choice = promotion_choice
        if choice is None and self.choose_promotion is not None:
            choice = self.choose_promotion(self.board.turn)

        if choice is None:
            raise PromotionRequiredError(
                f"Move {move.describe()} promotes a pawn, but no piece type was chosen"
            )
        return choice

    def _update_game_status(self) -> None:
        """
        Recompute legal moves for the side to move, and from those the status.

        * No legal moves and in check --> checkmate, the other side wins
        * No legal moves and not in check --> stalemate
        """
        color = self.board.turn
        self._legal_moves = legal_moves(self.board, color)

        if self._legal_moves:
            self._status = GameStatus(Status.IN_PROGRESS)
        elif is_in_check(self.board, color):
            self._status = GameStatus(Status.CHECKMATE, winner=opposite(color))
            logger.info("Checkmate, %s wins", opposite(color).name.lower())
        else:
            self._status = GameStatus(Status.STALEMATE)
            logger.info("Stalemate")
