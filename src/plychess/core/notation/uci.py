"""UCI long-algebraic move text (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plychess.core.move import PROMOTION_KINDS
from plychess.core.piece import kind_from_letter
from plychess.core.rules import find_move
from plychess.core.types import parse_square

if TYPE_CHECKING:
    from plychess.core.move import Move
    from plychess.core.position import Position


def parse_uci(position: Position, text: str) -> Move:
    """Resolve *text* to a legal move of *position*.

    The promotion letter may be left off, in which case the default
    promotion applies. Raises ``ValueError`` for malformed or illegal text.
    """
    text = text.strip()
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid UCI move: {text!r}")
    from_sq = parse_square(text[:2])
    to_sq = parse_square(text[2:4])
    promotion = None
    if len(text) == 5:
        promotion = kind_from_letter(text[4])
        if promotion not in PROMOTION_KINDS:
            raise ValueError(f"Invalid promotion in UCI move: {text!r}")

    move = find_move(position, from_sq, to_sq, promotion)
    if move is None:
        raise ValueError(f"Illegal move: {text}")
    return move
