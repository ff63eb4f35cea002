"""Bot player: a fixed-depth search exposed as move selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from plychess.engine.minimax import MinimaxSearch
from plychess.engine.search import IEngine

if TYPE_CHECKING:
    from plychess.core.move import Move
    from plychess.core.position import Position

_LOGGER = logging.getLogger(__name__)

DEFAULT_BOT_DEPTH: Final = 3

#: Bot identifiers a host may select, mapped to their search depth.
BOT_DEPTHS: Final = MappingProxyType({"1": DEFAULT_BOT_DEPTH})


@dataclass(frozen=True, slots=True)
class BotPlayer:
    """Chooses moves by searching a fixed number of plies.

    Holds no mutable state, so one instance may serve several games or
    threads. ``choose_move`` blocks until the whole tree is explored.
    """

    depth: int = DEFAULT_BOT_DEPTH
    kind: str = "1"
    engine: IEngine = field(default_factory=MinimaxSearch, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Bot depth must be >= 1, got {self.depth}")

    @property
    def name(self) -> str:
        return f"Bot {self.kind} (depth {self.depth})"

    @property
    def is_human(self) -> bool:
        return False

    def choose_move(self, position: Position) -> Move:
        """Best move for the side to move; the score is discarded.

        Raises :class:`~plychess.core.errors.NoLegalMovesError` when the game
        is already over.
        """
        result = self.engine.search(position, self.depth)
        _LOGGER.debug(
            "%s chose %s (score=%d, nodes=%d)",
            self.name,
            result.best_move.uci,
            result.score,
            result.nodes,
        )
        return result.best_move


def bot_for_kind(kind: str) -> BotPlayer:
    """Build the bot registered under *kind* in :data:`BOT_DEPTHS`."""
    depth = BOT_DEPTHS.get(kind)
    if depth is None:
        raise ValueError(f"Unknown bot kind {kind!r}; known: {sorted(BOT_DEPTHS)}")
    return BotPlayer(depth=depth, kind=kind)
