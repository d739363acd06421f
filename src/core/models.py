"""
Boundary layer data model(s).

The Game hands out a GameModel, the Service turns it into a response for whoever renders the board.
(Decouples the domain objects from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
Coordinates = tuple[int, int]


@dataclass
class GameModel:
    """Transport-safe representation of a chess game: only strings, numbers, and containers of those."""

    layout: list[str]
    turn: PieceColor
    castling_rights: dict[str, bool]
    en_passant_target: Optional[Coordinates]
    status: str
    winner: Optional[PieceColor]
    in_check: bool
    history_length: int
