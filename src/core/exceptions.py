"""
Custom exceptions used across layers.

Everything derives from GameError so the service layer can catch one type and turn it into a rejected request.
NOTE: not subclasses of ValueError. pydantic wraps those into a ValidationError, these pass through validators as is.
"""


class GameError(Exception):
    """Base class for anything that goes wrong while playing a game."""


class IllegalMoveError(GameError):
    """The requested origin/destination pair is not among the legal moves."""


class GameStateError(GameError):
    """The game is not in a state that accepts the request (ex. it already ended)."""


class PromotionRequiredError(GameError):
    """A pawn reaches the last row, but no piece type to promote into was supplied."""


class InvalidPromotionError(GameError):
    """A piece type was supplied that a pawn cannot promote into."""


class InvalidLayoutError(GameError):
    """A board layout that cannot be interpreted as 8 rows of 8 squares."""


class InvalidRequestError(GameError):
    """Request data that failed validation at the boundary."""
