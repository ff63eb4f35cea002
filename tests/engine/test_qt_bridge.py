"""Tests for Qt engine bridge worker."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from plychess.core.notation import STARTING_FEN, position_from_fen
from plychess.core.position import Position
from plychess.core.rules import legal_moves
from plychess.engine.bot import BotPlayer
from plychess.engine.qt_bridge import EngineWorker
from plychess.engine.search import SearchResult

pytestmark = pytest.mark.usefixtures("qapp")


class _FailingEngine:
    def search(self, _position: Position, _depth: int) -> SearchResult:
        raise RuntimeError("engine exploded")


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        position = position_from_fen(STARTING_FEN)
        worker = EngineWorker(BotPlayer(depth=1))

        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(position, 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert best_moves[0][1] == legal_moves(position)[0]
        assert len(errors) == 0

    def test_emits_no_move_when_game_is_over(self) -> None:
        position = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        worker = EngineWorker(BotPlayer(depth=1))

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(position, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_for_invalid_position(self) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a position", 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert "invalid position" in errors[0][1]

    def test_emits_error_when_engine_fails(self) -> None:
        worker = EngineWorker(BotPlayer(depth=1, engine=_FailingEngine()))
        errors = QSignalSpy(worker.search_error)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(position_from_fen(STARTING_FEN), 9)

        assert len(errors) == 1
        assert errors[0][0] == 9
        assert errors[0][1] == "engine exploded"
        assert len(best_moves) == 0

    def test_set_depth(self) -> None:
        worker = EngineWorker()
        assert worker.bot.depth == 3

        worker.set_depth(1)
        assert worker.bot.depth == 1

        worker.set_depth(0)
        assert worker.bot.depth == 1
