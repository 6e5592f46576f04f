from __future__ import annotations

from typing import Optional

from honeycomb.hexgrid import Hex


class HoneycombError(Exception):
    """Base class for engine errors."""
    pass


class IllegalMoveError(HoneycombError):
    """Placement is not in the current legal-move set. Game state is left unchanged."""

    def __init__(self, message: str, coord: Optional[Hex] = None):
        self.message = message
        self.coord = coord
        super().__init__(message)


class NoLegalMovesError(HoneycombError):
    """Raised inside the turn controller when the side to move has no placement."""

    def __init__(self, player):
        self.player = player
        super().__init__(f"{player} has no legal moves")


class OutOfBoundsError(HoneycombError, AssertionError):
    """A coordinate outside the board reached the board model. Indicates an engine bug."""

    def __init__(self, coord: Hex, radius: int):
        self.coord = coord
        self.radius = radius
        super().__init__(f"{coord} is outside the board (radius {radius})")
