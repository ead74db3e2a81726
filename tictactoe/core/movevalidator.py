from __future__ import annotations

from dataclasses import dataclass

from tictactoe.core.board import Board
from tictactoe.core.move import Move, MoveError, MoveResult


@dataclass
class MoveValidator:
    """
    Validates a human move against the board.

    Order matters: range first, then occupancy, so an out-of-range
    cell is never indexed.
    """

    def validate(self, board: Board, row: int, col: int) -> MoveResult:
        if not board.is_cell_valid(row, col):
            return MoveResult.fail(MoveError.OUT_OF_RANGE)

        if not board.is_cell_free(row, col):
            return MoveResult.fail(MoveError.OCCUPIED)

        return MoveResult.ok(Move(row, col))
