"""Tests for Board."""

import pytest

from plychess.core.board import Board, iter_bits
from plychess.core.enums import Color, PieceKind
from plychess.core.piece import Piece
from plychess.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, E8,
    D4, E2, E4,
)


class TestBoardInitial:
    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceKind.ROOK), (B1, PieceKind.KNIGHT), (C1, PieceKind.BISHOP),
            (D1, PieceKind.QUEEN), (E1, PieceKind.KING), (F1, PieceKind.BISHOP),
            (G1, PieceKind.KNIGHT), (H1, PieceKind.ROOK),
        ]
        for sq, kind in expected:
            assert board[sq] == Piece(Color.WHITE, kind), f"Mismatch at square {sq}"

    def test_black_king(self) -> None:
        assert Board.initial()[E8] == Piece(Color.BLACK, PieceKind.KING)

    def test_pawns(self) -> None:
        board = Board.initial()
        assert board.squares(Color.WHITE, PieceKind.PAWN) == list(range(8, 16))
        assert board.squares(Color.BLACK, PieceKind.PAWN) == list(range(48, 56))

    def test_empty_middle(self) -> None:
        board = Board.initial()
        assert all(board.is_empty(sq) for sq in range(16, 48))

    def test_piece_count(self) -> None:
        assert Board.initial().piece_count() == 32


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceKind.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)
        assert board.mask(Color.WHITE, PieceKind.PAWN) == 1 << E4

    def test_overwrite_updates_masks(self) -> None:
        board = Board()
        board[D4] = Piece(Color.WHITE, PieceKind.KNIGHT)
        board[D4] = Piece(Color.BLACK, PieceKind.ROOK)
        assert board.mask(Color.WHITE, PieceKind.KNIGHT) == 0
        assert board.occupancy(Color.WHITE) == 0
        assert board.occupancy(Color.BLACK) == 1 << D4

    def test_clear_square(self) -> None:
        board = Board.initial()
        board[E2] = None
        assert board.count(Color.WHITE, PieceKind.PAWN) == 7
        assert not board.occupancy(Color.WHITE) & (1 << E2)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board.king_square(Color.WHITE) == E1

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_missing_king_raises(self) -> None:
        with pytest.raises(ValueError):
            Board().king_square(Color.WHITE)

    def test_iteration_is_in_square_order(self) -> None:
        board = Board()
        board[A8] = Piece(Color.BLACK, PieceKind.ROOK)
        board[A1] = Piece(Color.WHITE, PieceKind.ROOK)
        board[E4] = Piece(Color.WHITE, PieceKind.PAWN)
        assert [sq for sq, _ in board] == [A1, E4, A8]

    def test_iter_bits(self) -> None:
        assert list(iter_bits((1 << 3) | (1 << 40) | 1)) == [0, 3, 40]

    def test_repr_shows_ranks(self) -> None:
        text = repr(Board.initial())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"
