"""Game layer: player variant and the game record.

Quick start::

    from plychess.game import GameState, player_from_selector

    game = GameState()
    white, black = player_from_selector("human"), player_from_selector("1")
"""

from plychess.game.player import HumanPlayer, PlayerKind, player_from_selector
from plychess.game.state import GameState, MoveRecord

__all__ = [
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "PlayerKind",
    "player_from_selector",
]
