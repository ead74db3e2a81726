import logging
import random
from typing import Optional

from tictactoe.core.board import Board, SIZE
from tictactoe.core.move import Move
from tictactoe.ai.config import AI_LEVELS, Difficulty
from tictactoe.ai.minimax import MinimaxAI

logger = logging.getLogger(__name__)


class TicTacToeAI:
    def __init__(
        self,
        difficulty: Difficulty = Difficulty.OPTIMAL,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = difficulty
        self.level_config = AI_LEVELS[difficulty]
        self.rng = rng or random.Random()
        self.ai = MinimaxAI()

    def get_move(self, board: Board) -> Move:
        """
        Pick the computer's move (0-based).
        Must not be called on a terminal board.
        """
        if self.level_config.use_search:
            return self.ai.find_best_move(board)
        return self._random_move(board)

    def _random_move(self, board: Board) -> Move:
        # Re-roll until the cell is free; an occupied cell is never overwritten.
        if not board.empty_cells():
            return Move.none()
        while True:
            row = self.rng.randrange(SIZE)
            col = self.rng.randrange(SIZE)
            if board.is_cell_free(row, col):
                return Move(row, col)
            logger.debug("random pick (%d, %d) occupied, re-rolling", row, col)
