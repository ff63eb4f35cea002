"""FEN parsing and serialization."""

from __future__ import annotations

import logging

from plychess.core.board import Board
from plychess.core.enums import CastlingRights, Color, PieceKind
from plychess.core.move_generator import MoveGenerator
from plychess.core.piece import Piece
from plychess.core.position import Position
from plychess.core.types import Square, make_square, parse_square, rank_of, square_name

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_SIDE_CHARS: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch)
                if piece.kind == PieceKind.PAWN and rank in (0, 7):
                    raise ValueError(f"Invalid FEN pawn on back rank: {fen!r}")
                board[make_square(file, rank)] = piece
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        if board.count(color, PieceKind.KING) != 1:
            raise ValueError(f"Invalid FEN: {color} must have exactly one king: {fen!r}")
    return board


def _parse_castling(field: str) -> CastlingRights:
    if field == "-":
        return CastlingRights.NONE
    rights = CastlingRights.NONE
    order = "".join(ch for ch, _ in _CASTLING_CHARS)
    last = -1
    for ch in field:
        index = order.find(ch)
        if index <= last:
            raise ValueError(f"Invalid FEN castling field: {field!r}")
        rights |= _CASTLING_CHARS[index][1]
        last = index
    return rights


def _parse_counter(field: str, minimum: int, name: str) -> int:
    if not (field.isascii() and field.isdigit()):
        raise ValueError(f"Invalid FEN {name}: {field!r}")
    value = int(field)
    if value < minimum:
        raise ValueError(f"Invalid FEN {name}: {field!r}")
    return value


def _check_en_passant(board: Board, side: Color, ep: Square, field: str) -> None:
    """The target must sit behind an enemy pawn that just made a double push."""
    if rank_of(ep) != (5 if side == Color.WHITE else 2):
        raise ValueError(f"Invalid FEN en-passant square for side-to-move: {field!r}")
    step = 8 if side == Color.WHITE else -8
    pushed, origin = ep - step, ep + step
    if board[pushed] != Piece(side.opposite, PieceKind.PAWN):
        raise ValueError(f"Invalid FEN en-passant square, no pawn to capture: {field!r}")
    if board[ep] is not None or board[origin] is not None:
        raise ValueError(f"Invalid FEN en-passant square, path not empty: {field!r}")


def position_from_fen(fen: str) -> Position:
    """Parse a six-field FEN string, raising ``ValueError`` when malformed."""
    parts = fen.split()
    if len(parts) != 6:
        raise ValueError(f"Invalid FEN (need 6 fields): {fen!r}")
    placement, side_part, castling_part, ep_part, halfmove_part, fullmove_part = parts

    board = _parse_placement(placement, fen)

    side = _SIDE_CHARS.get(side_part)
    if side is None:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = _parse_castling(castling_part)

    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        _check_en_passant(board, side, ep, ep_part)

    halfmove = _parse_counter(halfmove_part, 0, "halfmove clock")
    fullmove = _parse_counter(fullmove_part, 1, "fullmove number")

    position = Position(board, side, castling, ep, halfmove, fullmove)
    if MoveGenerator(position).is_in_check(side.opposite):
        raise ValueError(f"Invalid FEN: side not to move is in check: {fen!r}")
    return position


def parse_fen(fen: str | None) -> Position:
    """Parse *fen*, falling back to the starting position on any error.

    Never raises: hosts can feed raw user input straight in.
    """
    if not fen or not fen.strip():
        return position_from_fen(STARTING_FEN)
    try:
        return position_from_fen(fen)
    except ValueError as exc:
        _LOGGER.warning("Falling back to the starting position: %s", exc)
        return position_from_fen(STARTING_FEN)


def position_to_fen(pos: Position) -> str:
    """Serialize *pos* to its six-field FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        row = ""
        empty = 0
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right) or "-"
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"
    return (
        f"{'/'.join(rows)} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
