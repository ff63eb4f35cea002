"""Board: piece placement on the 64 squares."""

from __future__ import annotations

from collections.abc import Iterator

from plychess.core.enums import Color, PieceKind
from plychess.core.piece import Piece
from plychess.core.types import Square, make_square

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def iter_bits(bitboard: int) -> Iterator[Square]:
    """Yield the set squares of *bitboard* in ascending order."""
    while bitboard:
        lsb = bitboard & -bitboard
        yield lsb.bit_length() - 1
        bitboard ^= lsb


class Board:
    """Mutable mailbox board with a bitboard index per piece.

    ``board[sq]`` reads and writes squares; the per-piece and per-color
    bitboards are kept in step by ``__setitem__``.
    """

    __slots__ = ("_cells", "_by_piece", "_by_color")

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * 64
        self._by_piece: dict[Piece, int] = {}
        self._by_color: list[int] = [0, 0]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._cells[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old = self._cells[sq]
        if old == piece:
            return
        bit = 1 << sq
        if old is not None:
            self._by_piece[old] &= ~bit
            self._by_color[old.color] &= ~bit
        self._cells[sq] = piece
        if piece is not None:
            self._by_piece[piece] = self._by_piece.get(piece, 0) | bit
            self._by_color[piece.color] |= bit

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq] is None

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, in canonical square order."""
        for sq, piece in enumerate(self._cells):
            if piece is not None:
                yield sq, piece

    # -- Queries ------------------------------------------------------------

    def mask(self, color: Color, kind: PieceKind) -> int:
        """Bitboard of *color*'s pieces of *kind*."""
        return self._by_piece.get(Piece(color, kind), 0)

    def squares(self, color: Color, kind: PieceKind) -> list[Square]:
        return list(iter_bits(self.mask(color, kind)))

    def occupancy(self, color: Color) -> int:
        """Bitboard of every square *color* occupies."""
        return self._by_color[color]

    def count(self, color: Color, kind: PieceKind) -> int:
        return self.mask(color, kind).bit_count()

    def piece_count(self) -> int:
        return (self._by_color[0] | self._by_color[1]).bit_count()

    def king_square(self, color: Color) -> Square:
        """The square of *color*'s king; ``ValueError`` if there is none."""
        kings = self.mask(color, PieceKind.KING)
        if not kings:
            raise ValueError(f"No {color} king on board")
        return (kings & -kings).bit_length() - 1

    # -- Copying / factories ------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        b._by_piece = self._by_piece.copy()
        b._by_color = self._by_color.copy()
        return b

    @classmethod
    def initial(cls) -> Board:
        """Standard starting placement."""
        b = cls()
        for file, kind in enumerate(_BACK_RANK):
            b[make_square(file, 0)] = Piece(Color.WHITE, kind)
            b[make_square(file, 1)] = Piece(Color.WHITE, PieceKind.PAWN)
            b[make_square(file, 6)] = Piece(Color.BLACK, PieceKind.PAWN)
            b[make_square(file, 7)] = Piece(Color.BLACK, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            cells = (self._cells[make_square(file, rank)] for file in range(8))
            rows.append(f"{rank + 1} " + " ".join(str(p) if p else "." for p in cells))
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
