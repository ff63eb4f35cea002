"""Position: board plus game metadata, with reversible make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from plychess.core import zobrist
from plychess.core.board import Board
from plychess.core.enums import CastlingRights, Color, MoveFlag, PieceKind
from plychess.core.move import Move
from plychess.core.piece import Piece
from plychess.core.types import A1, A8, E1, E8, H1, H8, Square, file_of, make_square, rank_of

# Squares whose vacancy (piece leaving or being captured) clears a right.
_RIGHTS_TOUCHED: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
    E1: CastlingRights.WHITE_BOTH,
    E8: CastlingRights.BLACK_BOTH,
}
_KING_RIGHTS: tuple[CastlingRights, CastlingRights] = (
    CastlingRights.WHITE_BOTH,
    CastlingRights.BLACK_BOTH,
)
# Castle flag -> (rook origin file, rook destination file)
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


def en_passant_victim(move: Move) -> Square:
    """Square of the pawn removed by an en passant *move*."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


@dataclass(slots=True)
class _Undo:
    """State that :meth:`Position.unmake_move` cannot rebuild from the move."""

    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int
    captured: Piece | None
    key: int


class Position:
    """Complete game state: board, side to move, rights, en passant, clocks.

    Consumers treat positions as values: the public rule functions copy
    before touching one. ``make_move``/``unmake_move`` mutate in place and
    are meant for code that owns the instance (move generation, search).
    Equality compares the six FEN-visible fields, never the history.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_key",
        "_undo",
        "_key_history",
        "_key_counts",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._key = self._full_key()
        self._undo: list[_Undo] = []
        self._key_history: list[int] = [self._key]
        self._key_counts: dict[int, int] = {self._key: 1}

    # -- Make / unmake ------------------------------------------------------

    def make_move(self, move: Move) -> None:
        """Play *move* on this instance. The move is trusted, not validated."""
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on square {move.from_sq}")

        victim_sq = en_passant_victim(move) if move.flag == MoveFlag.EN_PASSANT else move.to_sq
        captured = self.board[victim_sq]
        en_passant_term = self._en_passant_term()
        self._undo.append(
            _Undo(
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                fullmove_number=self.fullmove_number,
                captured=captured,
                key=self._key,
            )
        )

        self._lift(move.from_sq)
        if captured is not None:
            self._lift(victim_sq)
        if move.promotion is not None:
            self._put(move.to_sq, Piece(piece.color, move.promotion))
        else:
            self._put(move.to_sq, piece)

        rook_files = _CASTLE_ROOK_FILES.get(move.flag)
        if rook_files is not None:
            rank = rank_of(move.from_sq)
            rook = self._lift(make_square(rook_files[0], rank))
            self._put(make_square(rook_files[1], rank), rook)

        castling = self.castling
        if piece.kind == PieceKind.KING:
            castling &= ~_KING_RIGHTS[piece.color]
        for sq in (move.from_sq, move.to_sq):
            castling &= ~_RIGHTS_TOUCHED.get(sq, CastlingRights.NONE)
        self._key ^= zobrist.castling_key(self.castling) ^ zobrist.castling_key(castling)
        self.castling = castling

        en_passant: Square | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN_PUSH:
            en_passant = (move.from_sq + move.to_sq) // 2
        self.en_passant = en_passant

        if piece.kind == PieceKind.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self._key ^= zobrist.side_key(Color.BLACK)
        self.side_to_move = self.side_to_move.opposite
        self._key ^= en_passant_term ^ self._en_passant_term()

        self._key_history.append(self._key)
        self._key_counts[self._key] = self._key_counts.get(self._key, 0) + 1

    def unmake_move(self, move: Move) -> None:
        """Take back the last :meth:`make_move`, which must have been *move*."""
        undo = self._undo.pop()
        key = self._key_history.pop()
        remaining = self._key_counts[key] - 1
        if remaining:
            self._key_counts[key] = remaining
        else:
            del self._key_counts[key]

        board = self.board
        self.side_to_move = self.side_to_move.opposite
        piece = board[move.to_sq]
        assert piece is not None
        if move.promotion is not None:
            piece = Piece(piece.color, PieceKind.PAWN)
        board[move.to_sq] = None
        board[move.from_sq] = piece
        if undo.captured is not None:
            victim_sq = (
                en_passant_victim(move) if move.flag == MoveFlag.EN_PASSANT else move.to_sq
            )
            board[victim_sq] = undo.captured

        rook_files = _CASTLE_ROOK_FILES.get(move.flag)
        if rook_files is not None:
            rank = rank_of(move.from_sq)
            board[make_square(rook_files[0], rank)] = board[make_square(rook_files[1], rank)]
            board[make_square(rook_files[1], rank)] = None

        self.castling = undo.castling
        self.en_passant = undo.en_passant
        self.halfmove_clock = undo.halfmove_clock
        self.fullmove_number = undo.fullmove_number
        self._key = undo.key

    # -- Hash-tracking board edits -------------------------------------------

    def _lift(self, sq: Square) -> Piece:
        piece = self.board[sq]
        assert piece is not None
        self._key ^= zobrist.piece_key(piece, sq)
        self.board[sq] = None
        return piece

    def _put(self, sq: Square, piece: Piece) -> None:
        self.board[sq] = piece
        self._key ^= zobrist.piece_key(piece, sq)

    def _full_key(self) -> int:
        key = zobrist.castling_key(self.castling)
        key ^= zobrist.side_key(self.side_to_move)
        key ^= self._en_passant_term()
        for sq, piece in self.board:
            key ^= zobrist.piece_key(piece, sq)
        return key

    def _en_passant_term(self) -> int:
        """Hash the target square only while a pawn stands ready to take."""
        ep = self.en_passant
        if ep is None:
            return 0
        side = self.side_to_move
        pushed = ep - 8 if side == Color.WHITE else ep + 8
        pawn = Piece(side, PieceKind.PAWN)
        rank = rank_of(pushed)
        for file in (file_of(pushed) - 1, file_of(pushed) + 1):
            if 0 <= file < 8 and self.board[make_square(file, rank)] == pawn:
                return zobrist.en_passant_key(ep)
        return 0

    # -- Utilities ----------------------------------------------------------

    @property
    def key(self) -> int:
        """Zobrist fingerprint of the FEN-visible state (clocks excluded).

        The en passant square only counts while a pawn of the side to move
        stands next to the pushed pawn, so a double push nobody can answer
        does not split otherwise repeated positions.
        """
        return self._key

    def repetition_count(self) -> int:
        """How often the current key has occurred along this game's history."""
        return self._key_counts.get(self._key, 0)

    def copy(self) -> Position:
        """Independent copy; keeps the repetition history, drops the undo stack."""
        pos = Position.__new__(Position)
        pos.board = self.board.copy()
        pos.side_to_move = self.side_to_move
        pos.castling = self.castling
        pos.en_passant = self.en_passant
        pos.halfmove_clock = self.halfmove_clock
        pos.fullmove_number = self.fullmove_number
        pos._key = self._key
        pos._undo = []
        pos._key_history = self._key_history.copy()
        pos._key_counts = self._key_counts.copy()
        return pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{self.board!r}\n"
            f"{self.side_to_move} to move, castling={self.castling!r}, "
            f"ep={self.en_passant}, clocks={self.halfmove_clock}/{self.fullmove_number}"
        )
