from __future__ import annotations

import logging
from typing import Optional

from tictactoe.core.board import Board, Cell, SYMBOLS
from tictactoe.core.move import Move, MoveResult
from tictactoe.core.gamestate import GameState
from tictactoe.core.movevalidator import MoveValidator

logger = logging.getLogger(__name__)


class Game:
    """
    Main game model.

    Owns:
      - Board
      - MoveValidator
      - GameState (active mark, winner/draw, history, step counter)

    The game never picks moves itself; controllers feed it human
    or computer moves through commit().
    """

    def __init__(self, starting_player: Cell = SYMBOLS[0]) -> None:
        """
        Initialize game.

        Args:
            starting_player: Mark that moves first (default: X)
        """
        if starting_player == Cell.EMPTY:
            raise ValueError("starting_player must be a mark, not EMPTY")
        self.board = Board()
        self.validator = MoveValidator()
        self.starting_player: Cell = starting_player
        self.state = GameState(current_player=starting_player)

    # -------------------------
    # State helpers
    # -------------------------

    @property
    def current_player(self) -> Cell:
        return self.state.current_player

    @property
    def winner(self) -> Optional[Cell]:
        return self.state.winner

    @property
    def is_draw(self) -> bool:
        return self.state.is_draw

    def is_game_over(self) -> bool:
        return self.state.is_game_over()

    # -------------------------
    # Move / validation
    # -------------------------

    def submit_human_move(self, row: int, col: int) -> MoveResult:
        """
        Validate 1-based coordinates typed by a player.

        Does NOT commit; returns the 0-based Move on success.
        """
        return self.validator.validate(self.board, row - 1, col - 1)

    def can_move(self, move: Move) -> bool:
        return not self.is_game_over() and self.board.is_cell_free(move.row, move.col)

    def commit(self, move: Move) -> None:
        """
        Write the active mark, then check Win before Draw.
        If the game continues, the turn passes to the other mark.

        Raises:
            RuntimeError if the game is already over.
        """
        if self.is_game_over():
            raise RuntimeError("Game is already over.")

        mark = self.state.current_player
        self.board.make_move(move, mark)
        self.state.record_move(move, mark)
        logger.debug("step %d: %s plays %s", self.state.step, mark, move)

        if self.board.is_win(mark):
            self.state.winner = mark
            return

        if self.board.is_draw():
            self.state.is_draw = True
            return

        self.state.switch_turn()

    # -------------------------
    # Reset
    # -------------------------

    def reset(self, starting_player: Optional[Cell] = None) -> None:
        """Reset game to initial state."""
        if starting_player is not None:
            self.starting_player = starting_player
        self.board.clear()
        self.state = GameState(current_player=self.starting_player)
