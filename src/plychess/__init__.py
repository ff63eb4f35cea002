"""plychess: legal-move generation and a plain minimax chess bot.

The host-facing surface::

    from plychess import apply_move, BotPlayer, game_status, legal_moves, parse_fen

    pos = parse_fen(user_text)          # falls back to the starting position
    if not game_status(pos).is_over:
        pos = apply_move(pos, BotPlayer().choose_move(pos))
"""

from plychess.core import (
    STARTING_FEN,
    Color,
    GameStatus,
    InvalidMoveError,
    Move,
    MoveFlag,
    NoLegalMovesError,
    Outcome,
    Piece,
    PieceKind,
    Position,
    apply_move,
    find_move,
    game_status,
    legal_moves,
    move_to_san,
    parse_fen,
    parse_san,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from plychess.engine import BotPlayer, MinimaxSearch, bot_for_kind, evaluate, search
from plychess.game import GameState, HumanPlayer, PlayerKind, player_from_selector

__version__ = "0.1.0"

__all__ = [
    "STARTING_FEN",
    "BotPlayer",
    "Color",
    "GameState",
    "GameStatus",
    "HumanPlayer",
    "InvalidMoveError",
    "MinimaxSearch",
    "Move",
    "MoveFlag",
    "NoLegalMovesError",
    "Outcome",
    "Piece",
    "PieceKind",
    "PlayerKind",
    "Position",
    "apply_move",
    "bot_for_kind",
    "evaluate",
    "find_move",
    "game_status",
    "legal_moves",
    "move_to_san",
    "parse_fen",
    "parse_san",
    "parse_uci",
    "player_from_selector",
    "position_from_fen",
    "position_to_fen",
    "search",
]
