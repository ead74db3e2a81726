from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from tictactoe.ai.config import AI_LEVELS, Difficulty, difficulty_from_menu_key
from tictactoe.ai.tictactoe_ai import TicTacToeAI
from tictactoe.app.controller_base import BaseController, ControllerEvent, EventType
from tictactoe.cli.commands import CommandProcessor, CommandType, Expect, ParseResult
from tictactoe.cli.view import CliView
from tictactoe.core.board import Cell, SYMBOLS
from tictactoe.core.game import Game
from tictactoe.core.move import Move, MoveResult

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    vs_computer: bool = False
    difficulty: Optional[Difficulty] = None


class ControllerState(Enum):
    CONFIGURING_OPPONENT = "configuring_opponent"
    CONFIGURING_DIFFICULTY = "configuring_difficulty"
    CHOOSING_FIRST_PLAYER = "choosing_first_player"
    TURN_LOOP = "turn_loop"
    WIN = "win"
    DRAW = "draw"


TERMINAL_STATES = (ControllerState.WIN, ControllerState.DRAW)


class GameController(BaseController):
    """
    Local game controller (human vs human, or human vs computer).

    State machine:
      CONFIGURING_OPPONENT -> CONFIGURING_DIFFICULTY (vs computer only)
        -> CHOOSING_FIRST_PLAYER -> TURN_LOOP -> WIN | DRAW

    Rules:
      - SYMBOLS[1] is always the computer's mark, whoever moves first.
      - An invalid difficulty goes back to the opponent question.
      - Human moves are re-asked until valid and free.
    """

    def __init__(
        self,
        *,
        config: Optional[SessionConfig] = None,
        first_player: Optional[Cell] = None,
        rng: Optional[random.Random] = None,
        view: Optional[CliView] = None,
        input_fn: Callable[[str], str] = input,
    ) -> None:
        self.cfg = SessionConfig()
        self.rng = rng or random.Random()
        self.first_player = first_player
        self.ai: Optional[TicTacToeAI] = None
        self.state = ControllerState.CONFIGURING_OPPONENT

        super().__init__(
            game=Game(),
            view=view or CliView(),
            command_processor=CommandProcessor(),
            input_fn=input_fn,
        )

        # Pre-answered menus (command line flags)
        if config is not None:
            self.submit_opponent_choice(config.vs_computer)
            if config.vs_computer and config.difficulty is not None:
                self.submit_difficulty(config.difficulty)

    # ============================================================
    # State queries
    # ============================================================

    @property
    def winner(self) -> Optional[Cell]:
        return self.game.winner if self.state == ControllerState.WIN else None

    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def is_computer_turn(self) -> bool:
        return (
            self.state == ControllerState.TURN_LOOP
            and self.cfg.vs_computer
            and self.game.current_player == SYMBOLS[1]
        )

    # ============================================================
    # Adapter -> core
    # ============================================================

    def submit_opponent_choice(self, vs_computer: bool) -> None:
        self._require(ControllerState.CONFIGURING_OPPONENT)
        self.cfg.vs_computer = vs_computer
        if vs_computer:
            self._set_state(ControllerState.CONFIGURING_DIFFICULTY)
        else:
            self.cfg.difficulty = None
            self._set_state(ControllerState.CHOOSING_FIRST_PLAYER)

    def submit_difficulty(self, difficulty: Optional[Difficulty]) -> None:
        """None stands for an unrecognized menu answer."""
        self._require(ControllerState.CONFIGURING_DIFFICULTY)
        if difficulty is None:
            self.view.set_error("Invalid difficulty!")
            self.cfg = SessionConfig()
            self._set_state(ControllerState.CONFIGURING_OPPONENT)
            return
        self.cfg.difficulty = difficulty
        self._set_state(ControllerState.CHOOSING_FIRST_PLAYER)

    def choose_first_player(self) -> Cell:
        self._require(ControllerState.CHOOSING_FIRST_PLAYER)
        if self.cfg.vs_computer and self.cfg.difficulty is None:
            raise RuntimeError("Playing against the computer needs a difficulty.")
        mark = self.first_player or self.rng.choice(SYMBOLS)
        self.game.reset(starting_player=mark)
        if self.cfg.vs_computer:
            self.ai = TicTacToeAI(self.cfg.difficulty, rng=self.rng)
        self.view.announce_first_player(mark)
        self._set_state(ControllerState.TURN_LOOP)
        return mark

    def submit_human_move(self, row: int, col: int) -> MoveResult:
        """
        Validate and commit 1-based coordinates for the active mark.
        On failure nothing changes and the turn stays the same.
        """
        self._require(ControllerState.TURN_LOOP)
        if self.is_computer_turn():
            raise RuntimeError("It is the computer's turn.")
        result = self.game.submit_human_move(row, col)
        if result.success:
            self._commit(result.move)
        return result

    def play_computer_turn(self) -> Move:
        self._require(ControllerState.TURN_LOOP)
        if not self.is_computer_turn() or self.ai is None:
            raise RuntimeError("It is not the computer's turn.")
        move = self.ai.get_move(self.game.board)
        self._commit(move)
        return move

    # ============================================================
    # Base hooks
    # ============================================================

    def expecting(self) -> Expect:
        if self.state == ControllerState.CONFIGURING_OPPONENT:
            return Expect.YES_NO
        if self.state == ControllerState.CONFIGURING_DIFFICULTY:
            return Expect.MENU
        return Expect.MOVE

    def prompt(self) -> str:
        if self.state == ControllerState.CONFIGURING_OPPONENT:
            return self.view.opponent_prompt()
        if self.state == ControllerState.CONFIGURING_DIFFICULTY:
            return self.view.difficulty_prompt([cfg.label for cfg in AI_LEVELS.values()])
        self.view.announce_turn(self.game.current_player)
        return self.view.prompt

    def poll_external_events(self) -> None:
        """
        Steps that need no input: the coin toss for the first player,
        and the computer's move when it is its turn.
        """
        if self.state == ControllerState.CHOOSING_FIRST_PLAYER:
            self.choose_first_player()

        if self.is_computer_turn() and self.ai is not None:
            move = self.ai.get_move(self.game.board)
            self.push_event(ControllerEvent(EventType.AI, move))

    def handle_event(self, event: ControllerEvent) -> None:
        if event.type != EventType.AI:
            return
        if not self.is_computer_turn():
            return
        move: Move = event.payload  # type: ignore[assignment]
        if not self.game.can_move(move):
            raise RuntimeError(f"Computer produced an illegal move: {move}")
        self._commit(move)

    def handle_input(self, parsed: ParseResult) -> None:
        if parsed.error and self.state == ControllerState.CONFIGURING_DIFFICULTY:
            # any unrecognized answer, unknown commands included
            self.submit_difficulty(None)
            return
        if parsed.error:
            self.view.set_error(parsed.error)
            return

        if self.state == ControllerState.CONFIGURING_OPPONENT:
            if parsed.command is None:
                return  # not y/n: ask again
            self.submit_opponent_choice(parsed.command.type == CommandType.ACCEPT)
            return

        if self.state == ControllerState.CONFIGURING_DIFFICULTY:
            self.submit_difficulty(difficulty_from_menu_key(parsed.choice or ""))
            return

        if self.state == ControllerState.TURN_LOOP and parsed.position is not None:
            row, col = parsed.position
            result = self.submit_human_move(row, col)
            if not result.success:
                self.view.set_error(result.error_message)

    # ============================================================
    # Helpers
    # ============================================================

    def _commit(self, move: Move) -> None:
        mark = self.game.current_player
        self.game.commit(move)
        self.view.render_board(self.game.board)

        if self.game.winner is not None:
            self._set_state(ControllerState.WIN)
            self.view.announce_result(mark)
            self.stop()
        elif self.game.is_draw:
            self._set_state(ControllerState.DRAW)
            self.view.announce_result(None)
            self.stop()

    def _set_state(self, state: ControllerState) -> None:
        logger.debug("controller: %s -> %s", self.state.value, state.value)
        self.state = state

    def _require(self, state: ControllerState) -> None:
        if self.state != state:
            raise RuntimeError(f"Expected state {state.value}, controller is in {self.state.value}")
