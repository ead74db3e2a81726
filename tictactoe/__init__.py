"""
tictactoe-cli
=============
Console tic-tac-toe for two humans, or one human against the computer.
The computer plays random moves ("Possible") or perfect minimax ("Impossible").
"""

__version__ = "1.0.0"
