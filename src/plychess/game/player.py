"""Player variant: a seat is taken either by a human or by a bot.

Hosts dispatch on the variant::

    if isinstance(player, BotPlayer):
        move = player.choose_move(position)
    else:
        move = await_user_input()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from plychess.engine.bot import BOT_DEPTHS, BotPlayer, bot_for_kind

_HUMAN_SELECTORS = frozenset({"h", "human"})


@dataclass(frozen=True, slots=True)
class HumanPlayer:
    """A seat whose moves arrive from outside (UI, terminal, network)."""

    name: str = "Human"

    @property
    def is_human(self) -> bool:
        return True


PlayerKind: TypeAlias = HumanPlayer | BotPlayer


def player_from_selector(selector: str) -> PlayerKind:
    """Map a host-side selector (``"human"``, ``"1"``) to a player.

    Raises ``ValueError`` for anything that names neither a human nor a
    registered bot kind.
    """
    text = selector.strip().lower()
    if text in _HUMAN_SELECTORS:
        return HumanPlayer()
    if text in BOT_DEPTHS:
        return bot_for_kind(text)
    raise ValueError(
        f"Unknown player selector {selector!r}; use 'human' or one of {sorted(BOT_DEPTHS)}"
    )
