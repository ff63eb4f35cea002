"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from plychess.core.enums import MoveFlag, PieceKind
from plychess.core.piece import kind_letter
from plychess.core.types import Square, square_name

#: Kind a pawn promotes to when the host does not pick one.
DEFAULT_PROMOTION: Final = PieceKind.QUEEN

PROMOTION_KINDS: Final = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """A single move; equal when every field is equal."""

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceKind | None = None

    @property
    def is_capture(self) -> bool:
        """Whether the move removes an enemy piece (en passant included)."""
        return self.flag in (MoveFlag.CAPTURE, MoveFlag.EN_PASSANT)

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def uci(self) -> str:
        """Long-algebraic form, e.g. ``e7e8q``."""
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promotion is not None:
            text += kind_letter(self.promotion)
        return text

    def __str__(self) -> str:
        return self.uci
