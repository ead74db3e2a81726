from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tictactoe.core.board import SIZE


@dataclass(frozen=True)
class Move:
    """
    A candidate or committed play (0-based row/col).
    `score` only carries meaning when produced by the search.
    """
    row: int
    col: int
    score: int = 0

    @staticmethod
    def none() -> "Move":
        return Move(-1, -1, 0)

    def is_none(self) -> bool:
        return self.row < 0 or self.col < 0

    def __str__(self) -> str:
        """1-based, as the player types it."""
        return f"{self.row + 1} {self.col + 1}"


class MoveError(Enum):
    """Recoverable move-input errors."""
    NOT_A_NUMBER = "You should enter numbers!"
    OUT_OF_RANGE = f"Coordinates should be from 1 to {SIZE}!"
    OCCUPIED = "This cell is occupied! Choose another one!"

    @property
    def message(self) -> str:
        return self.value


@dataclass
class MoveResult:
    """Result of submitting a move."""
    success: bool
    move: Optional[Move] = None
    error: Optional[MoveError] = None

    @property
    def error_message(self) -> str:
        return self.error.message if self.error is not None else ""

    @staticmethod
    def ok(move: Move) -> "MoveResult":
        return MoveResult(success=True, move=move)

    @staticmethod
    def fail(error: MoveError) -> "MoveResult":
        return MoveResult(success=False, error=error)
