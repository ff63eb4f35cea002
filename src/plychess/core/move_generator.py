"""Pseudo-legal and legal move generation, plus attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plychess.core.board import iter_bits
from plychess.core.enums import CastlingRights, Color, MoveFlag, PieceKind
from plychess.core.move import PROMOTION_KINDS, Move
from plychess.core.piece import Piece
from plychess.core.types import Square, file_of, make_square, on_board, rank_of

if TYPE_CHECKING:
    from plychess.core.position import Position

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2),
)
KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 1), (1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (-1, 1),
)
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, -1), (-1, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS


# -- Lookup tables ------------------------------------------------------------


def _jump_table(offsets: tuple[tuple[int, int], ...]) -> tuple[tuple[Square, ...], ...]:
    table: list[tuple[Square, ...]] = []
    for sq in range(64):
        f, r = file_of(sq), rank_of(sq)
        table.append(
            tuple(make_square(f + df, r + dr) for df, dr in offsets if on_board(f + df, r + dr))
        )
    return tuple(table)


def _ray_table(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    table: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            f, r = file_of(sq) + df, rank_of(sq) + dr
            ray: list[Square] = []
            while on_board(f, r):
                ray.append(make_square(f, r))
                f, r = f + df, r + dr
            rays.append(tuple(ray))
        table.append(tuple(rays))
    return tuple(table)


def _mask(squares: tuple[Square, ...]) -> int:
    bits = 0
    for sq in squares:
        bits |= 1 << sq
    return bits


def _pawn_attacker_table(color: Color) -> tuple[int, ...]:
    """For each square, the bitboard of *color* pawns that attack it."""
    behind = -1 if color == Color.WHITE else 1
    return tuple(
        _mask(
            tuple(
                make_square(file_of(sq) + df, rank_of(sq) + behind)
                for df in (-1, 1)
                if on_board(file_of(sq) + df, rank_of(sq) + behind)
            )
        )
        for sq in range(64)
    )


_KNIGHT_TARGETS = _jump_table(KNIGHT_OFFSETS)
_KING_TARGETS = _jump_table(KING_OFFSETS)
_KNIGHT_MASKS = tuple(_mask(t) for t in _KNIGHT_TARGETS)
_KING_MASKS = tuple(_mask(t) for t in _KING_TARGETS)
_PAWN_ATTACKERS = (_pawn_attacker_table(Color.WHITE), _pawn_attacker_table(Color.BLACK))
_ROOK_RAYS = _ray_table(ROOK_DIRS)
_BISHOP_RAYS = _ray_table(BISHOP_DIRS)
_QUEEN_RAYS = _ray_table(QUEEN_DIRS)
_SLIDER_RAYS = {
    PieceKind.BISHOP: _BISHOP_RAYS,
    PieceKind.ROOK: _ROOK_RAYS,
    PieceKind.QUEEN: _QUEEN_RAYS,
}

# Pawn geometry per color: (step, start rank, rank before promotion)
_PAWN_GEOMETRY: tuple[tuple[int, int, int], tuple[int, int, int]] = ((8, 1, 6), (-8, 6, 1))

# Castling per color and side: (right, king target, rook corner, must be empty, must be safe)
_CastleRow = tuple[
    CastlingRights, MoveFlag, Square, Square, tuple[Square, ...], tuple[Square, ...]
]
_CASTLING: dict[Color, tuple[_CastleRow, ...]] = {
    Color.WHITE: (
        (CastlingRights.WHITE_KINGSIDE, MoveFlag.CASTLE_KINGSIDE, 6, 7, (5, 6), (5, 6)),
        (CastlingRights.WHITE_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE, 2, 0, (1, 2, 3), (3, 2)),
    ),
    Color.BLACK: (
        (CastlingRights.BLACK_KINGSIDE, MoveFlag.CASTLE_KINGSIDE, 62, 63, (61, 62), (61, 62)),
        (CastlingRights.BLACK_QUEENSIDE, MoveFlag.CASTLE_QUEENSIDE, 58, 56, (57, 58, 59), (59, 58)),
    ),
}
_KING_HOME: tuple[Square, Square] = (4, 60)


class MoveGenerator:
    """Move generation for one :class:`Position`.

    Legal filtering plays each candidate on the given position with
    ``make_move``/``unmake_move`` and restores it before returning, so the
    generator must only be handed a position its caller owns.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """Legal moves for the side to move, in generation order."""
        pos = self._pos
        mover = pos.side_to_move
        legal: list[Move] = []
        for move in self.generate_pseudo_legal_moves():
            pos.make_move(move)
            if not self.is_in_check(mover):
                legal.append(move)
            pos.unmake_move(move)
        return legal

    def has_legal_move(self) -> bool:
        pos = self._pos
        mover = pos.side_to_move
        for move in self.generate_pseudo_legal_moves():
            pos.make_move(move)
            safe = not self.is_in_check(mover)
            pos.unmake_move(move)
            if safe:
                return True
        return False

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """Moves obeying piece movement rules, own-king safety unchecked.

        Pieces are visited in ascending square order.
        """
        board = self._board
        color = self._pos.side_to_move
        moves: list[Move] = []
        for sq in iter_bits(board.occupancy(color)):
            piece = board[sq]
            assert piece is not None
            kind = piece.kind
            if kind == PieceKind.PAWN:
                self._pawn_moves(sq, color, moves)
            elif kind == PieceKind.KNIGHT:
                self._jump_moves(sq, color, _KNIGHT_TARGETS[sq], moves)
            elif kind == PieceKind.KING:
                self._jump_moves(sq, color, _KING_TARGETS[sq], moves)
                self._castling_moves(sq, color, moves)
            else:
                self._slide_moves(sq, color, _SLIDER_RAYS[kind][sq], moves)
        return moves

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Whether *color*'s king is attacked."""
        return self.is_square_attacked(self._board.king_square(color), color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Whether any piece of *by_color* attacks *sq*."""
        board = self._board
        if board.mask(by_color, PieceKind.PAWN) & _PAWN_ATTACKERS[by_color][sq]:
            return True
        if board.mask(by_color, PieceKind.KNIGHT) & _KNIGHT_MASKS[sq]:
            return True
        if board.mask(by_color, PieceKind.KING) & _KING_MASKS[sq]:
            return True
        queen = Piece(by_color, PieceKind.QUEEN)
        return self._ray_hits(
            _ROOK_RAYS[sq], Piece(by_color, PieceKind.ROOK), queen
        ) or self._ray_hits(_BISHOP_RAYS[sq], Piece(by_color, PieceKind.BISHOP), queen)

    def _ray_hits(
        self, rays: tuple[tuple[Square, ...], ...], slider: Piece, queen: Piece
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece == slider or piece == queen:
                    return True
                break
        return False

    # -- Per-piece generators -----------------------------------------------

    def _pawn_moves(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step, start_rank, last_rank = _PAWN_GEOMETRY[color]
        rank = rank_of(sq)
        promoting = rank == last_rank

        one = sq + step
        if board.is_empty(one):
            if promoting:
                moves.extend(Move(sq, one, MoveFlag.NORMAL, kind) for kind in PROMOTION_KINDS)
            else:
                moves.append(Move(sq, one))
                two = one + step
                if rank == start_rank and board.is_empty(two):
                    moves.append(Move(sq, two, MoveFlag.DOUBLE_PAWN_PUSH))

        # En passant needs the double-pushed pawn beside this one.
        enemy_pawn = Piece(color.opposite, PieceKind.PAWN)
        file = file_of(sq)
        for df in (-1, 1):
            if not 0 <= file + df < 8:
                continue
            target_sq = one + df
            target = board[target_sq]
            if target is not None:
                if target.color == color:
                    continue
                if promoting:
                    moves.extend(
                        Move(sq, target_sq, MoveFlag.CAPTURE, kind) for kind in PROMOTION_KINDS
                    )
                else:
                    moves.append(Move(sq, target_sq, MoveFlag.CAPTURE))
            elif target_sq == self._pos.en_passant and board[sq + df] == enemy_pawn:
                moves.append(Move(sq, target_sq, MoveFlag.EN_PASSANT))

    def _jump_moves(
        self, sq: Square, color: Color, targets: tuple[Square, ...], moves: list[Move]
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))

    def _slide_moves(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, MoveFlag.CAPTURE))
                break

    def _castling_moves(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rights = self._pos.castling
        if king_sq != _KING_HOME[color] or not rights & (
            CastlingRights.WHITE_BOTH if color == Color.WHITE else CastlingRights.BLACK_BOTH
        ):
            return
        board = self._board
        enemy = color.opposite
        rook = Piece(color, PieceKind.ROOK)
        in_check: bool | None = None
        for right, flag, target, corner, empty, safe in _CASTLING[color]:
            if not rights & right or board[corner] != rook:
                continue
            if not all(board.is_empty(s) for s in empty):
                continue
            if in_check is None:
                in_check = self.is_square_attacked(king_sq, enemy)
            if in_check:
                return
            if any(self.is_square_attacked(s, enemy) for s in safe):
                continue
            moves.append(Move(king_sq, target, flag))
