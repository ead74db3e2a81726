"""Console I/O: input parsing and rendering."""

from tictactoe.cli.commands import Command, CommandProcessor, CommandType, Expect, ParseResult
from tictactoe.cli.view import CliView, Message, MessageType

__all__ = [
    "Command",
    "CommandProcessor",
    "CommandType",
    "Expect",
    "ParseResult",
    "CliView",
    "Message",
    "MessageType",
]
