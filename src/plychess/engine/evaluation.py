"""Static evaluation: material count from White's point of view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from plychess.core.enums import Color, PieceKind

if TYPE_CHECKING:
    from plychess.core.position import Position

PIECE_VALUES: Final[dict[PieceKind, int]] = {
    PieceKind.PAWN: 100,
    PieceKind.KNIGHT: 300,
    PieceKind.BISHOP: 300,
    PieceKind.ROOK: 500,
    PieceKind.QUEEN: 900,
    PieceKind.KING: 0,
}


def evaluate(position: Position) -> int:
    """Centipawn material balance: positive favors White, negative Black."""
    board = position.board
    score = 0
    for kind, value in PIECE_VALUES.items():
        if value:
            score += value * (board.count(Color.WHITE, kind) - board.count(Color.BLACK, kind))
    return score
