"""
Tests for tictactoe.app.controller_game

Drives the state machine through run() with scripted input, and through
the adapter-facing methods directly.
"""

import random
from typing import List, Optional

import pytest

from tictactoe.ai.config import Difficulty
from tictactoe.app.controller_base import ControllerEvent, EventType
from tictactoe.app.controller_game import ControllerState, GameController, SessionConfig
from tictactoe.core.board import Cell, SYMBOLS
from tictactoe.core.move import Move, MoveError


class AutoHuman:
    """
    input() stand-in: replays queued lines first, then (during the turn
    loop, with autoplay on) always answers with the first free cell.
    Otherwise it ends the session with EOF.
    """

    def __init__(self, *lines: str, autoplay: bool = True) -> None:
        self.lines: List[str] = list(lines)
        self.autoplay = autoplay
        self.prompts: List[str] = []
        self.ctrl: Optional[GameController] = None

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if self.lines:
            return self.lines.pop(0)
        if (
            self.autoplay
            and self.ctrl is not None
            and self.ctrl.state == ControllerState.TURN_LOOP
        ):
            row, col = self.ctrl.game.board.empty_cells()[0]
            return f"{row + 1} {col + 1}"
        raise EOFError


def make_controller(human: AutoHuman, **kwargs) -> GameController:
    kwargs.setdefault("rng", random.Random(7))
    ctrl = GameController(input_fn=human, **kwargs)
    human.ctrl = ctrl
    return ctrl


class TestConfiguration:
    """Opponent and difficulty menus."""

    def test_starts_configuring_opponent(self):
        ctrl = GameController()
        assert ctrl.state == ControllerState.CONFIGURING_OPPONENT

    def test_vs_human_skips_difficulty(self):
        ctrl = GameController()
        ctrl.submit_opponent_choice(False)
        assert ctrl.state == ControllerState.CHOOSING_FIRST_PLAYER
        assert ctrl.cfg == SessionConfig(vs_computer=False, difficulty=None)

    def test_vs_computer_asks_difficulty(self):
        ctrl = GameController()
        ctrl.submit_opponent_choice(True)
        assert ctrl.state == ControllerState.CONFIGURING_DIFFICULTY
        ctrl.submit_difficulty(Difficulty.OPTIMAL)
        assert ctrl.state == ControllerState.CHOOSING_FIRST_PLAYER
        assert ctrl.cfg.difficulty == Difficulty.OPTIMAL

    def test_invalid_difficulty_returns_to_opponent(self, capsys):
        ctrl = GameController()
        ctrl.submit_opponent_choice(True)
        ctrl.submit_difficulty(None)
        assert ctrl.state == ControllerState.CONFIGURING_OPPONENT
        assert ctrl.cfg == SessionConfig()
        assert "[ERR] Invalid difficulty!" in capsys.readouterr().out

    @pytest.mark.parametrize("answer", ["/2", "3", ""])
    def test_any_bad_difficulty_returns_to_opponent(self, answer, capsys):
        human = AutoHuman("y", answer, autoplay=False)
        ctrl = make_controller(human)
        ctrl.run()

        opponent_q = ctrl.view.opponent_prompt()
        assert human.prompts[1].startswith("Choose difficulty:")
        assert human.prompts[2] == opponent_q
        assert ctrl.state == ControllerState.CONFIGURING_OPPONENT
        out = capsys.readouterr().out
        assert "[ERR] Invalid difficulty!" in out
        assert "Unknown command" not in out

    def test_help_on_difficulty_menu_keeps_menu(self, capsys):
        human = AutoHuman("y", "/help", "2", autoplay=False)
        ctrl = make_controller(human, first_player=Cell.X)
        ctrl.run()

        assert human.prompts[2].startswith("Choose difficulty:")
        assert ctrl.cfg.difficulty == Difficulty.OPTIMAL
        assert "Invalid difficulty!" not in capsys.readouterr().out

    def test_computer_without_difficulty_cannot_start(self):
        ctrl = GameController(config=SessionConfig(vs_computer=False))
        ctrl.cfg.vs_computer = True
        with pytest.raises(RuntimeError):
            ctrl.choose_first_player()
        assert ctrl.ai is None

    def test_wrong_state_raises(self):
        ctrl = GameController()
        with pytest.raises(RuntimeError):
            ctrl.submit_difficulty(Difficulty.RANDOM)
        with pytest.raises(RuntimeError):
            ctrl.submit_human_move(1, 1)

    def test_preconfigured(self):
        ctrl = GameController(config=SessionConfig(vs_computer=True, difficulty=Difficulty.RANDOM))
        assert ctrl.state == ControllerState.CHOOSING_FIRST_PLAYER

    def test_preconfigured_without_difficulty_still_asks(self):
        ctrl = GameController(config=SessionConfig(vs_computer=True))
        assert ctrl.state == ControllerState.CONFIGURING_DIFFICULTY

    def test_menu_reprompts(self, capsys):
        """Unknown y/n answer re-asks silently; bad difficulty goes back to y/n."""
        human = AutoHuman("maybe", "y", "5", "n")
        ctrl = make_controller(human, first_player=Cell.X)
        ctrl.run()

        opponent_q = ctrl.view.opponent_prompt()
        assert human.prompts[0] == opponent_q
        assert human.prompts[1] == opponent_q
        assert human.prompts[2].startswith("Choose difficulty:")
        assert human.prompts[3] == opponent_q
        assert ctrl.cfg.vs_computer is False
        assert "[ERR] Invalid difficulty!" in capsys.readouterr().out


class TestFirstPlayer:
    """Coin toss for the first mark."""

    def test_forced_first_player(self):
        ctrl = GameController(config=SessionConfig(vs_computer=False), first_player=Cell.O)
        assert ctrl.choose_first_player() == Cell.O
        assert ctrl.game.current_player == Cell.O
        assert ctrl.state == ControllerState.TURN_LOOP

    def test_random_first_player_uses_both_marks(self):
        seen = set()
        for seed in range(20):
            ctrl = GameController(config=SessionConfig(vs_computer=False), rng=random.Random(seed))
            seen.add(ctrl.choose_first_player())
        assert seen == set(SYMBOLS)

    def test_computer_mark_does_not_depend_on_first_player(self):
        cfg = SessionConfig(vs_computer=True, difficulty=Difficulty.RANDOM)
        ctrl = GameController(config=cfg, first_player=Cell.X)
        ctrl.choose_first_player()
        assert not ctrl.is_computer_turn()

        ctrl = GameController(config=cfg, first_player=Cell.O)
        ctrl.choose_first_player()
        assert ctrl.is_computer_turn()


class TestTurnLoop:
    """Human input handling and termination."""

    def test_human_vs_human_win(self, capsys):
        human = AutoHuman("n", "1 1", "2 1", "1 2", "2 2", "1 3")
        ctrl = make_controller(human, first_player=Cell.X)
        ctrl.run()

        assert ctrl.state == ControllerState.WIN
        assert ctrl.winner == Cell.X
        assert not ctrl.running
        out = capsys.readouterr().out
        assert "X starts the game!" in out
        assert "X's turn" in out and "O's turn" in out
        assert out.rstrip().endswith("X wins")

    def test_human_vs_human_draw(self, capsys):
        # X O X / X O O / O X X
        human = AutoHuman("n", "1 1", "1 2", "1 3", "2 2", "2 1", "2 3", "3 2", "3 1", "3 3")
        ctrl = make_controller(human, first_player=Cell.X)
        ctrl.run()

        assert ctrl.state == ControllerState.DRAW
        assert ctrl.winner is None
        assert capsys.readouterr().out.rstrip().endswith("Draw")

    def test_bad_moves_reprompt_same_turn(self, capsys):
        human = AutoHuman("n", "abc", "4 1", "0 2", "1 1", "1 1", autoplay=False)
        ctrl = make_controller(human, first_player=Cell.X)
        ctrl.run()  # ends on EOF

        out = capsys.readouterr().out
        assert "[ERR] You should enter numbers!" in out
        assert "[ERR] Coordinates should be from 1 to 3!" in out
        assert "[ERR] This cell is occupied! Choose another one!" in out
        assert ctrl.state == ControllerState.TURN_LOOP
        assert ctrl.game.board.get(0, 0) == Cell.X
        assert ctrl.game.current_player == Cell.O
        assert ctrl.game.board.count(Cell.O) == 0

    def test_submit_human_move_results(self):
        ctrl = GameController(config=SessionConfig(vs_computer=False), first_player=Cell.X)
        ctrl.choose_first_player()
        assert ctrl.submit_human_move(0, 0).error == MoveError.OUT_OF_RANGE
        assert ctrl.submit_human_move(2, 2).success
        assert ctrl.submit_human_move(2, 2).error == MoveError.OCCUPIED
        assert ctrl.game.current_player == Cell.O

    def test_help_and_quit(self, capsys):
        human = AutoHuman("n", "/help", "/quit", "1 1")
        ctrl = make_controller(human, first_player=Cell.X)
        ctrl.run()

        out = capsys.readouterr().out
        assert "Commands: /help, /quit" in out
        assert "Exiting..." in out
        assert ctrl.game.board.count(Cell.X) == 0
        assert human.lines == ["1 1"]


class TestComputerOpponent:
    """Games against the computer."""

    def test_optimal_computer_never_loses(self):
        human = AutoHuman()
        cfg = SessionConfig(vs_computer=True, difficulty=Difficulty.OPTIMAL)
        ctrl = make_controller(human, config=cfg, first_player=Cell.X)
        ctrl.run()

        assert ctrl.is_finished()
        assert ctrl.winner != Cell.X
        # corner opening must be answered in the center
        assert ctrl.game.board.get(1, 1) == Cell.O

    def test_optimal_beats_naive_human(self):
        """First-free-cell play loses against perfect play."""
        human = AutoHuman()
        cfg = SessionConfig(vs_computer=True, difficulty=Difficulty.OPTIMAL)
        ctrl = make_controller(human, config=cfg, first_player=Cell.X)
        ctrl.run()
        assert ctrl.state == ControllerState.WIN
        assert ctrl.winner == Cell.O

    def test_menu_driven_random_game(self):
        human = AutoHuman("y", "1")
        ctrl = make_controller(human, first_player=Cell.O, rng=random.Random(3))
        ctrl.run()

        assert ctrl.cfg == SessionConfig(vs_computer=True, difficulty=Difficulty.RANDOM)
        assert ctrl.is_finished()
        board = ctrl.game.board
        assert board.count(Cell.O) - board.count(Cell.X) in (0, 1)
        # every committed move landed on a distinct cell
        cells = [(m.row, m.col) for m, _ in ctrl.game.state.move_history]
        assert len(cells) == len(set(cells))

    def test_play_computer_turn(self):
        cfg = SessionConfig(vs_computer=True, difficulty=Difficulty.RANDOM)
        ctrl = GameController(config=cfg, first_player=Cell.O, rng=random.Random(1))
        ctrl.choose_first_player()
        with pytest.raises(RuntimeError):
            ctrl.submit_human_move(1, 1)
        move = ctrl.play_computer_turn()
        assert ctrl.game.board.get(move.row, move.col) == Cell.O
        assert ctrl.game.current_player == Cell.X
        with pytest.raises(RuntimeError):
            ctrl.play_computer_turn()

    def test_illegal_computer_move_is_rejected(self):
        cfg = SessionConfig(vs_computer=True, difficulty=Difficulty.OPTIMAL)
        ctrl = GameController(config=cfg, first_player=Cell.X)
        ctrl.choose_first_player()
        ctrl.submit_human_move(2, 2)
        with pytest.raises(RuntimeError):
            ctrl.handle_event(ControllerEvent(EventType.AI, Move(1, 1)))
        assert ctrl.game.board.count(Cell.O) == 0
