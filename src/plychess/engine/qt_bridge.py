"""Qt bridge running bot move selection in a worker thread."""

from __future__ import annotations

import logging
from dataclasses import replace

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from plychess.core.errors import NoLegalMovesError
from plychess.core.position import Position
from plychess.engine.bot import BotPlayer

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker: move it to a ``QThread`` and send it requests.

    Results come back through queued signals tagged with the caller's
    request id, so a GUI thread never blocks on the search.
    """

    best_move_ready = pyqtSignal(int, object)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_bot",)

    def __init__(self, bot: BotPlayer | None = None) -> None:
        super().__init__()
        self._bot = bot if bot is not None else BotPlayer()

    @property
    def bot(self) -> BotPlayer:
        return self._bot

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Choose a move for *position_obj* and emit the outcome."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        try:
            move = self._bot.choose_move(position_obj)
        except NoLegalMovesError:
            self.search_no_move.emit(request_id)
            return
        except Exception as exc:
            _LOGGER.exception("Search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        self.best_move_ready.emit(request_id, move)

    @pyqtSlot(int)
    def set_depth(self, depth: int) -> None:
        """Change the search depth used by later requests."""
        if depth < 1:
            _LOGGER.warning("Ignoring invalid search depth %d", depth)
            return
        self._bot = replace(self._bot, depth=depth)
