"""Notation: FEN positions, SAN and UCI move text."""

from plychess.core.notation.fen import (
    STARTING_FEN,
    parse_fen,
    position_from_fen,
    position_to_fen,
)
from plychess.core.notation.san import move_to_san, parse_san
from plychess.core.notation.uci import parse_uci

__all__ = [
    "STARTING_FEN",
    "move_to_san",
    "parse_fen",
    "parse_san",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
