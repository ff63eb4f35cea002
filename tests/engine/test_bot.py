"""Tests for the bot player."""

from __future__ import annotations

import logging

import pytest

from plychess.core.errors import NoLegalMovesError
from plychess.core.notation import STARTING_FEN, position_from_fen
from plychess.core.position import Position
from plychess.core.rules import legal_moves
from plychess.engine.bot import BOT_DEPTHS, DEFAULT_BOT_DEPTH, BotPlayer, bot_for_kind
from plychess.engine.search import SearchResult


class _RecordingEngine:
    def __init__(self) -> None:
        self.depths: list[int] = []

    def search(self, position: Position, depth: int) -> SearchResult:
        self.depths.append(depth)
        move = legal_moves(position)[-1]
        return SearchResult(best_move=move, score=42, depth=depth, nodes=7)


class TestBotPlayer:
    def test_defaults(self) -> None:
        bot = BotPlayer()
        assert bot.depth == DEFAULT_BOT_DEPTH == 3
        assert bot.kind == "1"
        assert not bot.is_human
        assert bot.name == "Bot 1 (depth 3)"

    @pytest.mark.parametrize("depth", [0, -2])
    def test_rejects_bad_depth(self, depth: int) -> None:
        with pytest.raises(ValueError):
            BotPlayer(depth=depth)

    def test_uses_injected_engine(self) -> None:
        engine = _RecordingEngine()
        bot = BotPlayer(depth=5, engine=engine)
        pos = position_from_fen(STARTING_FEN)

        assert bot.choose_move(pos) == legal_moves(pos)[-1]
        assert engine.depths == [5]

    def test_equality_ignores_engine(self) -> None:
        assert BotPlayer(depth=2) == BotPlayer(depth=2, engine=_RecordingEngine())
        assert BotPlayer(depth=2) != BotPlayer(depth=3)

    def test_finds_mate(self) -> None:
        pos = position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        assert BotPlayer().choose_move(pos).uci == "a1a8"

    def test_same_move_every_time(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 b - - 0 1")
        bot = BotPlayer(depth=2)
        assert bot.choose_move(pos) == bot.choose_move(pos)

    def test_no_legal_moves_propagates(self) -> None:
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        with pytest.raises(NoLegalMovesError):
            BotPlayer(depth=1).choose_move(pos)

    def test_logs_decision(self, caplog: pytest.LogCaptureFixture) -> None:
        pos = position_from_fen(STARTING_FEN)
        with caplog.at_level(logging.DEBUG, logger="plychess.engine.bot"):
            BotPlayer(depth=1).choose_move(pos)
        assert "Bot 1 (depth 1) chose" in caplog.text


class TestBotForKind:
    def test_known_kind(self) -> None:
        bot = bot_for_kind("1")
        assert bot.kind == "1"
        assert bot.depth == BOT_DEPTHS["1"]

    @pytest.mark.parametrize("kind", ["2", "", "human"])
    def test_unknown_kind(self, kind: str) -> None:
        with pytest.raises(ValueError):
            bot_for_kind(kind)
