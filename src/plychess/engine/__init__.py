"""Engine package: evaluation, minimax search and the bot player.

:mod:`plychess.engine.qt_bridge` (PyQt6) is not imported here so the pure
engine stays usable without a Qt installation.
"""

from plychess.engine.bot import BOT_DEPTHS, DEFAULT_BOT_DEPTH, BotPlayer, bot_for_kind
from plychess.engine.evaluation import PIECE_VALUES, evaluate
from plychess.engine.minimax import MATE_SCORE, MinimaxSearch, search
from plychess.engine.search import Evaluator, IEngine, RankedMove, SearchResult

__all__ = [
    "BOT_DEPTHS",
    "DEFAULT_BOT_DEPTH",
    "MATE_SCORE",
    "PIECE_VALUES",
    "BotPlayer",
    "Evaluator",
    "IEngine",
    "MinimaxSearch",
    "RankedMove",
    "SearchResult",
    "bot_for_kind",
    "evaluate",
    "search",
]
