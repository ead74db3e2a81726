"""Exhaustive minimax search (no pruning, no depth weighting)."""

import logging

from tictactoe.core.board import Board, Cell, SYMBOLS
from tictactoe.core.move import Move
from tictactoe.ai.config import SCORE_WIN, SCORE_LOSS, SCORE_DRAW

logger = logging.getLogger(__name__)

HUMAN = SYMBOLS[0]
COMPUTER = SYMBOLS[1]


class MinimaxAI:
    """
    Minimax that always scores from the computer's perspective:
    the computer maximizes, the human minimizes.

    The search mutates the given board in place and restores every
    cell before returning.
    """

    def __init__(self) -> None:
        self.nodes_explored = 0
        self.depth_reached = 0

    def find_best_move(self, board: Board) -> Move:
        """
        Score every free cell for the computer and keep the strictly
        best one. Ties go to the earliest cell in row-major order.

        Returns Move(-1, -1, 0) if the board has no free cell.
        """
        self.nodes_explored = 0
        self.depth_reached = 0

        best_score = None
        best_move = Move.none()

        for row, col in board.empty_cells():
            probe = Move(row, col)
            board.make_move(probe, COMPUTER)
            score = self.minimax(board, False, 0)
            board.make_move(probe, Cell.EMPTY)

            if best_score is None or score > best_score:
                best_score = score
                best_move = Move(row, col, score)

        logger.debug(
            "best move %s score=%d (nodes=%d, depth=%d)",
            (best_move.row, best_move.col),
            best_move.score,
            self.nodes_explored,
            self.depth_reached,
        )
        return best_move

    def minimax(self, board: Board, is_maximizing: bool, depth: int = 0) -> int:
        """
        Game-theoretic score of `board` with perfect play from both sides.

        Args:
            board: Position to evaluate (restored before returning).
            is_maximizing: True when the computer is to move.
            depth: Ply from the search root. Diagnostics only.

        Returns:
            SCORE_LOSS if the human has a line, SCORE_WIN if the computer
            has one, SCORE_DRAW on a full board, else the minimax value.
        """
        self.nodes_explored += 1
        if depth > self.depth_reached:
            self.depth_reached = depth

        if board.is_win(HUMAN):
            return SCORE_LOSS
        if board.is_win(COMPUTER):
            return SCORE_WIN
        if board.is_draw():
            return SCORE_DRAW

        mark = COMPUTER if is_maximizing else HUMAN
        best_score = None

        for row, col in board.empty_cells():
            probe = Move(row, col)
            board.make_move(probe, mark)
            score = self.minimax(board, not is_maximizing, depth + 1)
            board.make_move(probe, Cell.EMPTY)

            if best_score is None:
                best_score = score
            elif is_maximizing:
                best_score = max(best_score, score)
            else:
                best_score = min(best_score, score)

        return best_score


def minimax(board: Board, is_maximizing: bool) -> int:
    return MinimaxAI().minimax(board, is_maximizing)


def find_best_move(board: Board) -> Move:
    return MinimaxAI().find_best_move(board)
