"""Orchestration of communication from whoever renders the board to the game logic (and the reverse direction)."""

import logging
from typing import Optional, Self

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveModel,
    MoveRequest,
    MoveResponse,
    NewGameRequest,
)
from src.chess.game import Game, PromotionChooser
from src.chess.moves import Move
from src.chess.pieces import Color as DomainColor
from src.chess.pieces import PieceType as DomainPieceType
from src.core.config import Settings, get_settings
from src.core.exceptions import GameError
from src.core.logging_config import configure_logging
from src.core.models import GameModel
from src.core.shared_types import Color

logger = logging.getLogger(__name__)


class ChessService:
    """A single local game session, shared by the two players sitting at the same screen."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        choose_promotion: Optional[PromotionChooser] = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.choose_promotion = choose_promotion
        self.game = Game.new_game(
            starting_layout=self.settings.starting_layout,
            turn=DomainColor[self.settings.starting_turn.name],
            choose_promotion=choose_promotion,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        choose_promotion: Optional[PromotionChooser] = None,
    ) -> Self:
        """Entrypoint for an application: also sets up logging."""
        settings = settings if settings is not None else get_settings()
        configure_logging(settings.log_level)
        return cls(settings, choose_promotion)

    # -- consumer-facing operations ---
    def new_game(self, request: NewGameRequest) -> GameResponse:
        """
        Throw away the current session (and its history) and start over.

        Layout and turn each fall back to the configured ones when the request leaves them out.
        """
        layout = (
            request.starting_layout
            if request.starting_layout is not None
            else self.settings.starting_layout
        )
        turn = request.turn if request.turn is not None else self.settings.starting_turn

        self.game = Game.new_game(
            starting_layout=layout,
            turn=DomainColor[turn.name],
            choose_promotion=self.choose_promotion,
        )
        logger.info("New game started, %s to move", turn)
        return self._create_game_response(self.game.to_model())

    def get_game_state(self) -> GameResponse:
        """Used by the frontend to (re)draw the board."""
        return self._create_game_response(self.game.to_model())

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Moves for the side to move, optionally only those of the piece on `origin`."""
        moves = self.game.legal_moves_for_current_turn()
        if request.origin is not None:
            moves = [move for move in moves if move.origin.as_tuple() == request.origin]

        return LegalMovesResponse(
            color=Color[self.game.board.turn.name],
            legal_moves=[self._create_move_model(move) for move in moves],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----
        A rejected move is not an error for the caller: the frontend just asks the player to pick again.
        """
        promotion = (
            DomainPieceType[request.promote_to.name]
            if request.promote_to is not None
            else None
        )
        try:
            self.game.make_move(request.origin, request.destination, promotion)
        except GameError as exc:
            logger.info("Rejected move %s -> %s: %s", request.origin, request.destination, exc)
            return MoveResponse(
                accepted=False,
                reason=str(exc),
                game=self._create_game_response(self.game.to_model()),
            )

        return MoveResponse(
            accepted=True, game=self._create_game_response(self.game.to_model())
        )

    def undo(self) -> GameResponse:
        """Taking back a move when there is nothing to take back leaves the game as is."""
        self.game.undo()
        return self._create_game_response(self.game.to_model())

    # -- Internal helpers --
    def _create_game_response(self, model: GameModel) -> GameResponse:
        return GameResponse(
            board=model.layout,
            turn=model.turn,
            status=model.status,
            winner=model.winner,
            in_check=model.in_check,
            en_passant_target=model.en_passant_target,
            castling_rights=model.castling_rights,
            history_length=model.history_length,
        )

    def _create_move_model(self, move: Move) -> MoveModel:
        return MoveModel(
            origin=move.origin.as_tuple(),
            destination=move.destination.as_tuple(),
            is_capture=move.is_capture,
            is_castling=move.is_castling,
            is_en_passant=move.is_en_passant,
            is_promotion=move.is_promotion,
        )
