"""SAN (Standard Algebraic Notation) formatting and parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plychess.core.enums import MoveFlag, PieceKind
from plychess.core.move import DEFAULT_PROMOTION
from plychess.core.move_generator import MoveGenerator
from plychess.core.types import FILE_NAMES, RANK_NAMES, file_of, parse_square, rank_of, square_name

if TYPE_CHECKING:
    from plychess.core.move import Move
    from plychess.core.position import Position

_SAN_LETTERS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}
_SAN_KINDS: dict[str, PieceKind] = {v: k for k, v in _SAN_LETTERS.items()}


def move_to_san(position: Position, move: Move) -> str:
    """SAN of the legal *move*, given the position before it is played."""
    pos = position.copy()
    gen = MoveGenerator(pos)
    piece = pos.board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    elif piece.kind == PieceKind.PAWN:
        san = FILE_NAMES[file_of(move.from_sq)] + "x" if move.is_capture else ""
        san += square_name(move.to_sq)
        if move.promotion is not None:
            san += "=" + _SAN_LETTERS[move.promotion]
    else:
        rivals = [
            m.from_sq
            for m in gen.generate_legal_moves()
            if m.to_sq == move.to_sq
            and m.from_sq != move.from_sq
            and pos.board[m.from_sq] == piece
        ]
        qualifier = ""
        if rivals:
            if all(file_of(sq) != file_of(move.from_sq) for sq in rivals):
                qualifier = FILE_NAMES[file_of(move.from_sq)]
            elif all(rank_of(sq) != rank_of(move.from_sq) for sq in rivals):
                qualifier = RANK_NAMES[rank_of(move.from_sq)]
            else:
                qualifier = square_name(move.from_sq)
        san = _SAN_LETTERS[piece.kind] + qualifier
        san += ("x" if move.is_capture else "") + square_name(move.to_sq)

    pos.make_move(move)
    if gen.is_in_check(pos.side_to_move):
        san += "+" if gen.has_legal_move() else "#"
    return san


def parse_san(position: Position, san: str) -> Move:
    """Resolve *san* to the matching legal move of *position*.

    A pawn reaching the last rank without ``=X`` promotes to
    :data:`DEFAULT_PROMOTION`. Raises ``ValueError`` when the text matches
    no legal move or more than one.
    """
    legal = MoveGenerator(position.copy()).generate_legal_moves()
    clean = san.strip().rstrip("+#!?")

    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        flag = MoveFlag.CASTLE_KINGSIDE if len(clean) == 3 else MoveFlag.CASTLE_QUEENSIDE
        for m in legal:
            if m.flag == flag:
                return m
        raise ValueError(f"Illegal move: {san}")

    promotion: PieceKind | None = None
    if len(clean) > 2 and clean[-2] == "=":
        promotion = _SAN_KINDS.get(clean[-1])
        if promotion is None or promotion == PieceKind.KING:
            raise ValueError(f"Invalid promotion in {san!r}")
        clean = clean[:-2]

    to_sq = parse_square(clean[-2:])
    clean = clean[:-2].removesuffix("x")

    kind = PieceKind.PAWN
    if clean and clean[0] in _SAN_KINDS:
        kind = _SAN_KINDS[clean[0]]
        clean = clean[1:]

    from_file: int | None = None
    from_rank: int | None = None
    for ch in clean:
        if ch in FILE_NAMES:
            from_file = FILE_NAMES.index(ch)
        elif ch in RANK_NAMES:
            from_rank = RANK_NAMES.index(ch)
        else:
            raise ValueError(f"Invalid SAN: {san!r}")

    if kind == PieceKind.PAWN and promotion is None and rank_of(to_sq) in (0, 7):
        promotion = DEFAULT_PROMOTION

    candidates: list[Move] = []
    for m in legal:
        piece = position.board[m.from_sq]
        if piece is None or piece.kind != kind:
            continue
        if m.to_sq != to_sq or m.promotion != promotion:
            continue
        if from_file is not None and file_of(m.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(m.from_sq) != from_rank:
            continue
        candidates.append(m)
    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise ValueError(f"Illegal move: {san}")
    raise ValueError(f"Ambiguous move: {san} -> {[m.uci for m in candidates]}")
