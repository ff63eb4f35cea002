"""Contract-violation errors raised by the engine."""

from __future__ import annotations


class InvalidMoveError(ValueError):
    """A move that is not legal in the position it was applied to."""


class NoLegalMovesError(ValueError):
    """Search was asked for a move in a checkmate or stalemate position."""
