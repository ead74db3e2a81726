"""Game model: board, moves, validation and state."""

from tictactoe.core.board import Board, Cell, SIZE, SYMBOLS
from tictactoe.core.move import Move, MoveError, MoveResult
from tictactoe.core.game import Game

__all__ = ["Board", "Cell", "SIZE", "SYMBOLS", "Move", "MoveError", "MoveResult", "Game"]
