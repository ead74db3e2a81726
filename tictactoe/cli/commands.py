from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from tictactoe.core.board import SIZE
from tictactoe.core.move import MoveError


class CommandType(Enum):
    QUIT = "quit"
    HELP = "help"

    # y/n answers (opponent menu)
    ACCEPT = "accept"
    DECLINE = "decline"


class Expect(Enum):
    """What the current prompt is waiting for."""
    YES_NO = "yes_no"
    MENU = "menu"
    MOVE = "move"


@dataclass(frozen=True)
class Command:
    """Parsed command from user input."""
    type: CommandType
    raw: str


@dataclass(frozen=True)
class ParseResult:
    """
    Result of parsing one line input.
    At most one of (command, position, choice) is set on success.
    A result with nothing set and no error means "ask again silently".
    """
    command: Optional[Command] = None
    position: Optional[Tuple[int, int]] = None
    choice: Optional[str] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.error == "" and (
            self.command is not None or self.position is not None or self.choice is not None
        )


class CommandProcessor:
    """
    Parses user input line into:
      - Command (/quit, /help)
      - y/n answer
      - menu choice (raw text, mapped by the controller)
      - 1-based (row, col) move

    This class does NOT execute anything. Controllers decide what to do.
    Range and occupancy are checked by the game, not here.
    """

    def __init__(self, board_size: int = SIZE) -> None:
        if board_size <= 0:
            raise ValueError("board_size must be positive")
        self.board_size = board_size

    @property
    def help_cmds(self) -> str:
        return ", ".join(["/help", "/quit"])

    def help_text(self) -> str:
        return (
            f"Input: 'row col' (e.g. 2 3), each from 1 to {self.board_size}.\n"
            f"Commands: {self.help_cmds}"
        )

    # ---------- Public parse API ----------

    def parse(self, text: str, *, expect: Expect = Expect.MOVE) -> ParseResult:
        raw = (text or "").strip()

        if raw.startswith("/"):
            cmd = raw[1:].strip().lower()
            if cmd == "quit":
                return ParseResult(command=Command(CommandType.QUIT, raw))
            if cmd == "help":
                return ParseResult(command=Command(CommandType.HELP, raw))
            return ParseResult(error=f"Unknown command: {raw}")

        if expect == Expect.YES_NO:
            return self._parse_yes_no(raw)

        if expect == Expect.MENU:
            return ParseResult(choice=raw)

        return self._parse_move(raw)

    # ---------- Helpers ----------

    def _parse_yes_no(self, raw: str) -> ParseResult:
        yn = raw.lower()
        if yn in ("y", "yes"):
            return ParseResult(command=Command(CommandType.ACCEPT, raw))
        if yn in ("n", "no"):
            return ParseResult(command=Command(CommandType.DECLINE, raw))
        # anything else: re-ask without a message
        return ParseResult()

    def _parse_move(self, raw: str) -> ParseResult:
        # "row col"; tokens past the second are ignored
        parts = raw.split()
        try:
            row, col = int(parts[0]), int(parts[1])
        except (IndexError, ValueError):
            return ParseResult(error=MoveError.NOT_A_NUMBER.message)
        return ParseResult(position=(row, col))
