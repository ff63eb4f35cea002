"""Zobrist keys used to fingerprint positions for repetition counting."""

from __future__ import annotations

from typing import Final

from plychess.core.enums import CastlingRights, Color
from plychess.core.piece import Piece
from plychess.core.types import Square

_SEED: Final = 0x5EED_C0DE_1234_ABCD
_MASK_64: Final = (1 << 64) - 1


def _splitmix64(state: int) -> int:
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


def _key_block(start: int, length: int) -> tuple[int, ...]:
    return tuple(_splitmix64(_SEED + start + i) for i in range(length))


# Layout: 12 * 64 piece keys, 1 side key, 16 castling keys, 64 en passant keys.
_PIECE_KEYS: Final = _key_block(0, 12 * 64)
_SIDE_KEY: Final = _key_block(12 * 64, 1)[0]
_CASTLING_KEYS: Final = _key_block(12 * 64 + 1, 16)
_EN_PASSANT_KEYS: Final = _key_block(12 * 64 + 17, 64)


def piece_key(piece: Piece, sq: Square) -> int:
    index = (int(piece.color) * 6 + int(piece.kind) - 1) * 64 + sq
    return _PIECE_KEYS[index]


def side_key(side: Color) -> int:
    """Contribution of the side to move (zero for White)."""
    return _SIDE_KEY if side == Color.BLACK else 0


def castling_key(castling: CastlingRights) -> int:
    return _CASTLING_KEYS[int(castling) & 0xF]


def en_passant_key(ep_square: Square | None) -> int:
    return 0 if ep_square is None else _EN_PASSANT_KEYS[ep_square]
