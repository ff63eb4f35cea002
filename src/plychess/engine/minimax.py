"""Exhaustive depth-limited minimax (no pruning, no caching)."""

from __future__ import annotations

from typing import Final

from plychess.core.enums import Color
from plychess.core.errors import NoLegalMovesError
from plychess.core.move_generator import MoveGenerator
from plychess.core.position import Position
from plychess.engine.evaluation import evaluate
from plychess.engine.search import Evaluator, IEngine, RankedMove, SearchResult

#: Base magnitude of a checkmate score, far beyond any material sum.
MATE_SCORE: Final = 100_000


def _better(score: int, best: int, maximizing: bool) -> bool:
    return score > best if maximizing else score < best


class _Tree:
    """Per-call search state: a private position and a node counter."""

    __slots__ = ("position", "evaluate", "nodes")

    def __init__(self, position: Position, evaluate: Evaluator) -> None:
        self.position = position
        self.evaluate = evaluate
        self.nodes = 0

    def minimax(self, depth: int) -> int:
        """White-relative value of the current node searched *depth* plies deep."""
        self.nodes += 1
        pos = self.position
        gen = MoveGenerator(pos)
        side = pos.side_to_move

        if depth == 0:
            if gen.has_legal_move():
                return self.evaluate(pos)
            return self._terminal_score(gen, side, depth)

        moves = gen.generate_legal_moves()
        if not moves:
            return self._terminal_score(gen, side, depth)

        maximizing = side == Color.WHITE
        best: int | None = None
        for move in moves:
            pos.make_move(move)
            score = self.minimax(depth - 1)
            pos.unmake_move(move)
            if best is None or _better(score, best, maximizing):
                best = score
        assert best is not None
        return best

    @staticmethod
    def _terminal_score(gen: MoveGenerator, side: Color, depth: int) -> int:
        if not gen.is_in_check(side):
            return 0  # stalemate
        # Remaining depth rewards mates found closer to the root.
        mate = MATE_SCORE + depth
        return -mate if side == Color.WHITE else mate


class MinimaxSearch(IEngine):
    """Plain minimax: White maximizes, Black minimizes.

    Ties go to the first move in generation order, so results are
    reproducible and identical to a full tree walk. The evaluator is
    injectable; it is only called on non-terminal horizon nodes.
    """

    __slots__ = ("_evaluate",)

    def __init__(self, evaluator: Evaluator = evaluate) -> None:
        self._evaluate = evaluator

    def search(self, position: Position, depth: int) -> SearchResult:
        """Best move of *position* and its score, searching *depth* plies."""
        scored, nodes = self._score_root(position, depth)
        maximizing = position.side_to_move == Color.WHITE
        best = scored[0]
        for ranked in scored[1:]:
            if _better(ranked.score, best.score, maximizing):
                best = ranked
        return SearchResult(best.move, best.score, depth, nodes)

    def rank_moves(self, position: Position, depth: int) -> list[RankedMove]:
        """Every root move with its score, best first for the side to move.

        The sort is stable, so equal scores keep generation order and the
        first entry is always the move :meth:`search` returns.
        """
        scored, _ = self._score_root(position, depth)
        sign = -1 if position.side_to_move == Color.WHITE else 1
        return sorted(scored, key=lambda ranked: sign * ranked.score)

    def _score_root(self, position: Position, depth: int) -> tuple[list[RankedMove], int]:
        if depth < 1:
            raise ValueError("Search depth must be >= 1")

        tree = _Tree(position.copy(), self._evaluate)
        root = tree.position
        moves = MoveGenerator(root).generate_legal_moves()
        if not moves:
            raise NoLegalMovesError("No legal moves in the searched position")

        tree.nodes = 1
        scored: list[RankedMove] = []
        for move in moves:
            root.make_move(move)
            scored.append(RankedMove(move, tree.minimax(depth - 1)))
            root.unmake_move(move)
        return scored, tree.nodes


def search(position: Position, depth: int) -> SearchResult:
    """Module-level shortcut for ``MinimaxSearch().search``."""
    return MinimaxSearch().search(position, depth)
