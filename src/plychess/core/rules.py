"""Rule-level queries and the value-semantics move API.

The functions here never mutate the position they receive; move
generation and legality checks run on a private copy.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from plychess.core.enums import Color, GameResult, Outcome, PieceKind
from plychess.core.errors import InvalidMoveError
from plychess.core.move import DEFAULT_PROMOTION, Move
from plychess.core.move_generator import MoveGenerator
from plychess.core.types import Square, file_of, rank_of

if TYPE_CHECKING:
    from plychess.core.position import Position


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Ongoing, checkmate (with the winning color) or stalemate."""

    outcome: Outcome
    winner: Color | None = None

    @classmethod
    def ongoing(cls) -> GameStatus:
        return cls(Outcome.ONGOING)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(Outcome.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(Outcome.STALEMATE)

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.ONGOING


def legal_moves(position: Position) -> list[Move]:
    """Legal moves of *position* in stable generation order."""
    return MoveGenerator(position.copy()).generate_legal_moves()


def with_default_promotion(position: Position, move: Move) -> Move:
    """Fill in :data:`DEFAULT_PROMOTION` for a pawn reaching the last rank."""
    if move.promotion is not None:
        return move
    piece = position.board[move.from_sq]
    if piece is None or piece.kind != PieceKind.PAWN or rank_of(move.to_sq) not in (0, 7):
        return move
    return replace(move, promotion=DEFAULT_PROMOTION)


def apply_move(position: Position, move: Move) -> Position:
    """Return the position reached by playing the legal *move*.

    A promotion without a chosen kind becomes a queen promotion. Raises
    :class:`InvalidMoveError` for anything outside ``legal_moves(position)``;
    *position* itself is never modified.
    """
    move = with_default_promotion(position, move)
    child = position.copy()
    if move not in MoveGenerator(child).generate_legal_moves():
        raise InvalidMoveError(f"Illegal move {move.uci} ({move.flag.name})")
    child.make_move(move)
    return child


def find_move(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceKind | None = None,
) -> Move | None:
    """The legal move going from *from_sq* to *to_sq*, if there is one.

    Lets a host turn a pair of clicked squares into a fully flagged move.
    Promotions default to :data:`DEFAULT_PROMOTION`.
    """
    wanted = with_default_promotion(position, Move(from_sq, to_sq, promotion=promotion))
    for move in legal_moves(position):
        if (
            move.from_sq == from_sq
            and move.to_sq == to_sq
            and move.promotion == wanted.promotion
        ):
            return move
    return None


def game_status(position: Position) -> GameStatus:
    """Checkmate, stalemate or ongoing, from the side to move's legal moves."""
    gen = MoveGenerator(position.copy())
    if gen.has_legal_move():
        return GameStatus.ongoing()
    mover = position.side_to_move
    if gen.is_in_check(mover):
        return GameStatus.checkmate(mover.opposite)
    return GameStatus.stalemate()


class Rules:
    """Static rule checks: check, mate, stalemate and draw claims."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return game_status(position).outcome == Outcome.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return game_status(position).outcome == Outcome.STALEMATE

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K v K, K+minor v K, and K+B v K+B with same-colored bishops."""
        board = position.board
        total = board.piece_count()
        if total == 2:
            return True

        minors = [
            (sq, piece)
            for sq, piece in board
            if piece.kind in (PieceKind.KNIGHT, PieceKind.BISHOP)
        ]
        if total == 3:
            return len(minors) == 1
        if total == 4 and len(minors) == 2:
            (sq_a, a), (sq_b, b) = minors
            if a.kind == b.kind == PieceKind.BISHOP and a.color != b.color:
                return (file_of(sq_a) + rank_of(sq_a)) % 2 == (file_of(sq_b) + rank_of(sq_b)) % 2
        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

    @staticmethod
    def is_claimable_draw(position: Position) -> bool:
        """Fifty-move rule, threefold repetition or bare material."""
        return (
            Rules.is_fifty_move_rule(position)
            or Rules.is_threefold_repetition(position)
            or Rules.is_insufficient_material(position)
        )

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Result implied by the board alone (draw claims are not automatic)."""
        status = game_status(position)
        if status.outcome == Outcome.CHECKMATE:
            return GameResult.WHITE_WINS if status.winner == Color.WHITE else GameResult.BLACK_WINS
        if status.outcome == Outcome.STALEMATE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
