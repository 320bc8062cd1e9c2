"""
Terminal TicTacToe
==================
A two-player 3x3 TicTacToe game for the terminal, against another
person or the computer.

The engine keeps the board as 9-bit masks, detects wins, and ends a
match early as a draw once neither side can still complete a line.
Computer players move the same cursor a human does, one step at a time.
"""

__version__ = "1.0.0"
