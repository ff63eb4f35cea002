"""Tests for the plain minimax search."""

from __future__ import annotations

import pytest

from plychess.core.enums import Color, Outcome
from plychess.core.errors import NoLegalMovesError
from plychess.core.move import Move
from plychess.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from plychess.core.position import Position
from plychess.core.rules import apply_move, game_status, legal_moves
from plychess.core.types import parse_square
from plychess.engine.evaluation import evaluate
from plychess.engine.minimax import MATE_SCORE, MinimaxSearch, search

WHITE_MATES = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
BLACK_MATES = "r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1"
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def reference_minimax(position: Position, depth: int) -> int:
    """Full-tree minimax built only from the public move API."""
    status = game_status(position)
    if status.outcome == Outcome.STALEMATE:
        return 0
    if status.outcome == Outcome.CHECKMATE:
        mate = MATE_SCORE + depth
        return mate if status.winner == Color.WHITE else -mate
    if depth == 0:
        return evaluate(position)
    scores = [reference_minimax(apply_move(position, m), depth - 1) for m in legal_moves(position)]
    return max(scores) if position.side_to_move == Color.WHITE else min(scores)


class TestSearchResult:
    def test_returns_legal_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = search(pos, 2)
        assert result.best_move in legal_moves(pos)
        assert result.depth == 2

    def test_ties_go_to_first_generated_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = search(pos, 1)
        assert result.score == 0
        assert result.best_move == legal_moves(pos)[0]

    def test_node_count(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert search(pos, 1).nodes == 1 + 20
        assert search(pos, 2).nodes == 1 + 20 + 400

    def test_repeatable(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert search(pos, 2) == search(pos, 2)

    def test_input_untouched(self) -> None:
        pos = position_from_fen(KIWIPETE)
        key = pos.key
        search(pos, 2)
        assert position_to_fen(pos) == KIWIPETE
        assert pos.key == key


class TestTactics:
    def test_white_takes_the_queen(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
        result = search(pos, 1)
        assert result.best_move == Move(parse_square("d2"), parse_square("d5"), result.best_move.flag)
        assert result.best_move.is_capture
        assert result.score == 500

    def test_black_takes_the_rook(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 b - - 0 1")
        result = search(pos, 1)
        assert (result.best_move.from_sq, result.best_move.to_sq) == (
            parse_square("d5"),
            parse_square("d2"),
        )
        assert result.score == -900

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_white_mates_in_one(self, depth: int) -> None:
        pos = position_from_fen(WHITE_MATES)
        result = search(pos, depth)
        assert (result.best_move.from_sq, result.best_move.to_sq) == (
            parse_square("a1"),
            parse_square("a8"),
        )
        assert result.score == MATE_SCORE + depth - 1
        assert game_status(apply_move(pos, result.best_move)).winner == Color.WHITE

    @pytest.mark.parametrize("depth", [1, 2])
    def test_black_mates_in_one(self, depth: int) -> None:
        pos = position_from_fen(BLACK_MATES)
        result = search(pos, depth)
        assert (result.best_move.from_sq, result.best_move.to_sq) == (
            parse_square("a8"),
            parse_square("a1"),
        )
        assert result.score == -(MATE_SCORE + depth - 1)

    def test_stalemating_move_scores_zero(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/6Q1 w - - 0 1")
        ranked = MinimaxSearch().rank_moves(pos, 1)
        stalemate = next(r for r in ranked if r.move.uci == "g1g6")
        assert stalemate.score == 0
        assert ranked[0].score == MATE_SCORE


class TestOnePly:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            KIWIPETE,
            KIWIPETE.replace(" w ", " b "),
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1",
            "4k3/8/8/3q4/8/8/3R4/4K3 b - - 0 1",
        ],
    )
    def test_best_of_child_evaluations(self, fen: str) -> None:
        pos = position_from_fen(fen)
        children = [(m, apply_move(pos, m)) for m in legal_moves(pos)]
        assert all(not game_status(child).is_over for _, child in children)

        scores = [evaluate(child) for _, child in children]
        best = max(scores) if pos.side_to_move == Color.WHITE else min(scores)
        expected = children[scores.index(best)][0]

        result = search(pos, 1)
        assert result.best_move == expected
        assert result.score == best


class TestAgainstReference:
    @pytest.mark.parametrize(
        ("fen", "depth"),
        [
            (STARTING_FEN, 2),
            (WHITE_MATES, 2),
            (BLACK_MATES, 2),
            ("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1", 2),
            ("7k/8/5K2/8/8/8/8/6Q1 w - - 0 1", 2),
            ("8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1", 2),
        ],
    )
    def test_matches_full_tree(self, fen: str, depth: int) -> None:
        pos = position_from_fen(fen)
        result = search(pos, depth)
        assert result.score == reference_minimax(pos, depth)
        child = apply_move(pos, result.best_move)
        assert reference_minimax(child, depth - 1) == result.score


class TestRankMoves:
    def test_first_entry_matches_search(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
        ranked = MinimaxSearch().rank_moves(pos, 2)
        result = search(pos, 2)
        assert ranked[0].move == result.best_move
        assert ranked[0].score == result.score

    def test_covers_every_legal_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        ranked = MinimaxSearch().rank_moves(pos, 1)
        assert sorted(r.move.uci for r in ranked) == sorted(m.uci for m in legal_moves(pos))

    def test_black_ranked_ascending(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 b - - 0 1")
        scores = [r.score for r in MinimaxSearch().rank_moves(pos, 1)]
        assert scores == sorted(scores)

    def test_equal_scores_keep_generation_order(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        ranked = MinimaxSearch().rank_moves(pos, 1)
        assert [r.move for r in ranked] == legal_moves(pos)


class TestEvaluatorInjection:
    def test_custom_evaluator_is_used(self) -> None:
        calls: list[Position] = []

        def counting(position: Position) -> int:
            calls.append(position)
            return 0

        MinimaxSearch(counting).search(position_from_fen(STARTING_FEN), 1)
        assert len(calls) == 20

    def test_evaluator_picks_the_move(self) -> None:
        target = parse_square("h3")

        def likes_h3(position: Position) -> int:
            piece = position.board[target]
            return 1 if piece is not None and piece.color == Color.WHITE else 0

        result = MinimaxSearch(likes_h3).search(position_from_fen(STARTING_FEN), 1)
        assert result.best_move.to_sq == target
        assert result.score == 1


class TestErrors:
    @pytest.mark.parametrize("depth", [0, -1])
    def test_rejects_depth_below_one(self, depth: int) -> None:
        with pytest.raises(ValueError):
            search(position_from_fen(STARTING_FEN), depth)

    @pytest.mark.parametrize(
        "fen",
        [
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
            "7k/8/5KQ1/8/8/8/8/8 b - - 0 1",
        ],
    )
    def test_terminal_root_raises(self, fen: str) -> None:
        with pytest.raises(NoLegalMovesError):
            search(position_from_fen(fen), 2)
