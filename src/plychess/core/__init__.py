"""Core domain layer: pure chess rules with no third-party dependencies.

Quick start::

    from plychess.core import apply_move, legal_moves, parse_fen

    pos = parse_fen(None)  # starting position
    for move in legal_moves(pos):
        print(move)
"""

from plychess.core.board import Board
from plychess.core.enums import CastlingRights, Color, GameResult, MoveFlag, Outcome, PieceKind
from plychess.core.errors import InvalidMoveError, NoLegalMovesError
from plychess.core.move import DEFAULT_PROMOTION, PROMOTION_KINDS, Move
from plychess.core.move_generator import MoveGenerator
from plychess.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_fen,
    parse_san,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from plychess.core.piece import Piece
from plychess.core.position import Position
from plychess.core.rules import GameStatus, Rules, apply_move, find_move, game_status, legal_moves
from plychess.core.types import Square, file_of, make_square, parse_square, rank_of, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "Outcome",
    "PieceKind",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "DEFAULT_PROMOTION",
    "PROMOTION_KINDS",
    # Errors
    "InvalidMoveError",
    "NoLegalMovesError",
    # Move API
    "apply_move",
    "find_move",
    "game_status",
    "legal_moves",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_fen",
    "parse_san",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
