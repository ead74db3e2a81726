"""Computer opponent: minimax search and difficulty levels."""

from tictactoe.ai.config import Difficulty
from tictactoe.ai.minimax import MinimaxAI, find_best_move, minimax
from tictactoe.ai.tictactoe_ai import TicTacToeAI

__all__ = ["Difficulty", "MinimaxAI", "TicTacToeAI", "find_best_move", "minimax"]
