from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from tictactoe.core.board import Board, Cell


# =========================
# Message types
# =========================

class MessageType(Enum):
    ERR = "ERR"
    INFO = "INFO"
    TURN = "TURN"
    RESULT = "RESULT"
    QUIT = "QUIT"


@dataclass(frozen=True)
class Message:
    """
    A UI message printed between prompts.
    Only errors carry a visible tag:
      [ERR] You should enter numbers!
    """
    type: MessageType
    text: str = ""

    def render(self) -> str:
        if self.type == MessageType.ERR:
            return f"[{self.type.value}] {self.text}"
        return self.text


# =========================
# View
# =========================

class CliView:
    """
    Responsible ONLY for console output:
      1) board
      2) messages (errors, turn, result)
      3) prompts / menus

    It does NOT parse input or execute game logic.
    """

    def __init__(self, *, prompt: str = "Enter the coordinates: ") -> None:
        self.prompt = prompt
        self.last_message: Optional[Message] = None

    # ---------- Message API ----------

    def set_message(self, msg: Message) -> None:
        self.last_message = msg
        print(msg.render())

    def set_error(self, text: str) -> None:
        self.set_message(Message(MessageType.ERR, text))

    def set_info(self, text: str) -> None:
        self.set_message(Message(MessageType.INFO, text))

    def set_quit(self, text: str = "Bye!") -> None:
        self.set_message(Message(MessageType.QUIT, text))

    # ---------- Core -> adapter ----------

    def render_board(self, board: Board) -> None:
        print(board.to_cli())

    def announce_turn(self, mark: Cell) -> None:
        self.set_message(Message(MessageType.TURN, f"{mark.symbol()}'s turn"))

    def announce_first_player(self, mark: Cell) -> None:
        self.set_info(f"{mark.symbol()} starts the game!")

    def announce_result(self, winner: Optional[Cell]) -> None:
        """winner=None means the game ended in a draw."""
        text = f"{winner.symbol()} wins" if winner is not None else "Draw"
        self.set_message(Message(MessageType.RESULT, text))

    # ---------- Prompts ----------

    def opponent_prompt(self) -> str:
        return "Do you want to play against computer? (y/n): "

    def difficulty_prompt(self, labels: List[str]) -> str:
        lines = ["Choose difficulty:"]
        for i, label in enumerate(labels, start=1):
            lines.append(f"{i}. {label}")
        lines.append("Your choice: ")
        return "\n".join(lines)
