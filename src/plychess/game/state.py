"""Game record: current position, move history, undo and result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from plychess.core.enums import Color, GameResult
from plychess.core.notation import STARTING_FEN, move_to_san, parse_fen, position_to_fen
from plychess.core.position import Position
from plychess.core.rules import (
    GameStatus,
    Rules,
    apply_move,
    game_status,
    legal_moves,
    with_default_promotion,
)

if TYPE_CHECKING:
    from plychess.core.move import Move


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    fen_after: str


@dataclass
class GameState:
    """Owns one game: a stack of positions plus what was played between them.

    Positions are never mutated; every ply pushes a fresh one, which makes
    undo a pop. No threading and no UI here.
    """

    start_fen: str = field(default=STARTING_FEN, init=False)
    history: list[MoveRecord] = field(default_factory=list, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    _positions: list[Position] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.setup()

    # -- Initialisation -------------------------------------------------------

    def setup(self, fen: str | None = None) -> None:
        """Start (or restart) a game; malformed *fen* gives the standard start."""
        start = parse_fen(fen)
        self.start_fen = position_to_fen(start)
        self._positions = [start]
        self.history = []
        self.result = Rules.game_result(start)

    # -- Moves ----------------------------------------------------------------

    def push(self, move: Move) -> MoveRecord:
        """Play *move*; raises ``InvalidMoveError`` if it is not legal."""
        if self.is_game_over:
            raise ValueError("Game is already over")
        before = self.position
        move = with_default_promotion(before, move)
        after = apply_move(before, move)
        record = MoveRecord(
            move=move,
            san=move_to_san(before, move),
            fen_after=position_to_fen(after),
        )
        self._positions.append(after)
        self.history.append(record)
        self.result = Rules.game_result(after)
        return record

    def undo(self) -> Move | None:
        """Take back the last ply. Returns the undone move, or None if empty."""
        if not self.history:
            return None
        self._positions.pop()
        record = self.history.pop()
        self.result = Rules.game_result(self.position)
        return record.move

    # -- Queries --------------------------------------------------------------

    @property
    def position(self) -> Position:
        return self._positions[-1]

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def status(self) -> GameStatus:
        return game_status(self.position)

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def draw_claimable(self) -> bool:
        return Rules.is_claimable_draw(self.position)

    @property
    def ply_count(self) -> int:
        return len(self.history)

    def legal_moves(self) -> list[Move]:
        return legal_moves(self.position)

    def sans(self) -> list[str]:
        return [record.san for record in self.history]
