from __future__ import annotations

import queue
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from tictactoe.cli.commands import Command, CommandProcessor, CommandType, Expect, ParseResult
from tictactoe.cli.view import CliView, Message, MessageType
from tictactoe.core.game import Game


# =========================
# Events (controller internal)
# =========================

class EventType(Enum):
    AI = "ai"  # computer move


@dataclass(frozen=True)
class ControllerEvent:
    type: EventType
    payload: object


# =========================
# Base Controller
# =========================

class BaseController(ABC):
    """
    Common controller loop:
      - poll external events (computer moves, automatic steps)
      - prompt and read one line (blocking)
      - parse input into Command / menu choice / move
      - dispatch

    Concrete controllers implement:
      - poll_external_events()
      - handle_event()
      - handle_input()
      - expecting() / prompt()
      - on_quit_requested() (optional override)

    OOP rule:
      - Controller orchestrates.
      - Game handles gameplay.
      - View renders only.
      - CommandProcessor parses only.
    """

    def __init__(
        self,
        *,
        game: Game,
        view: CliView,
        command_processor: CommandProcessor,
        input_fn: Callable[[str], str] = input,
    ) -> None:
        self.game = game
        self.view = view
        self.cmd = command_processor

        self._input = input_fn
        self._running = True

        self._events: "queue.Queue[ControllerEvent]" = queue.Queue()

    # ---------- External event API ----------

    def push_event(self, event: ControllerEvent) -> None:
        self._events.put(event)

    @property
    def running(self) -> bool:
        return self._running

    # ---------- Main loop ----------

    def run(self) -> None:
        """
        Main loop:
          1) pull automatic steps (computer turn etc.)
          2) handle queued events
          3) read one line of input (blocking)
          4) handle parsed input
        """
        self.on_start()

        while self._running:
            self.poll_external_events()
            self._pump_events()
            if not self._running:
                break

            try:
                line = self._input(self.prompt())
            except EOFError:
                self.on_quit_requested()
                self._running = False
                break

            parsed = self.cmd.parse(line, expect=self.expecting())
            if parsed.command is not None and parsed.command.type in (CommandType.HELP, CommandType.QUIT):
                self._handle_command(parsed.command)
                continue

            self.handle_input(parsed)

        self.on_stop()

    # ---------- Event pumping ----------

    def _pump_events(self) -> None:
        while True:
            try:
                ev = self._events.get_nowait()
            except queue.Empty:
                return
            self.handle_event(ev)

    # ---------- Input dispatch ----------

    def _handle_command(self, command: Command) -> None:
        if command.type == CommandType.HELP:
            self.view.set_message(Message(MessageType.INFO, self.cmd.help_text()))
            return

        if command.type == CommandType.QUIT:
            self.on_quit_requested()
            self._running = False

    # =========================
    # Hooks / Abstract methods
    # =========================

    def stop(self) -> None:
        self._running = False

    def on_start(self) -> None:
        """Optional hook before loop starts."""
        pass

    def on_stop(self) -> None:
        """Optional hook after loop ends."""
        pass

    def on_quit_requested(self) -> None:
        self.view.set_quit("Exiting...")

    @abstractmethod
    def expecting(self) -> Expect:
        """What kind of answer the next prompt waits for."""
        raise NotImplementedError

    @abstractmethod
    def prompt(self) -> str:
        """Prompt text for the next input line."""
        raise NotImplementedError

    @abstractmethod
    def poll_external_events(self) -> None:
        """Push ControllerEvents for anything that happens without input."""
        raise NotImplementedError

    @abstractmethod
    def handle_event(self, event: ControllerEvent) -> None:
        raise NotImplementedError

    @abstractmethod
    def handle_input(self, parsed: ParseResult) -> None:
        """Handle one parsed line (everything except /help and /quit)."""
        raise NotImplementedError
