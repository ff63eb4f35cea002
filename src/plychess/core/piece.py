"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from plychess.core.enums import Color, PieceKind

_KIND_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
_LETTER_KINDS: dict[str, PieceKind] = {v: k for k, v in _KIND_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece; immutable and hashable."""

    color: Color
    kind: PieceKind

    def __str__(self) -> str:
        """FEN letter: uppercase for White, lowercase for Black."""
        letter = _KIND_LETTERS[self.kind]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Build a piece from its FEN letter, e.g. ``'N'`` is a white knight."""
        kind = _LETTER_KINDS.get(char.lower())
        if len(char) != 1 or kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, kind)


def kind_letter(kind: PieceKind) -> str:
    """Lowercase letter for *kind* (``'q'`` for a queen)."""
    return _KIND_LETTERS[kind]


def kind_from_letter(letter: str) -> PieceKind:
    kind = _LETTER_KINDS.get(letter.lower())
    if kind is None:
        raise ValueError(f"Invalid piece letter: {letter!r}")
    return kind
