"""Controllers: turn order and game flow."""

from tictactoe.app.controller_game import ControllerState, GameController, SessionConfig

__all__ = ["ControllerState", "GameController", "SessionConfig"]
