"""Search result models and the engine protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from plychess.core.move import Move
    from plychess.core.position import Position

Evaluator = Callable[["Position"], int]


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Best move found at the root and its White-relative score."""

    best_move: Move
    score: int
    depth: int
    nodes: int


@dataclass(slots=True, frozen=True)
class RankedMove:
    """A root move with the score its subtree evaluated to."""

    move: Move
    score: int


class IEngine(Protocol):
    """Anything that can pick a move for a position at a given depth."""

    def search(self, position: Position, depth: int) -> SearchResult: ...
