"""
Engine module for the TicTacToe game.
Handles the board, game state, rules, and win / draw detection.
"""

from .board import Actor, Board, Cell, LineMasks, Position
from .actions import Action, InputSource
from .game_state import GameState, GameStatus, GameView
from .move_validator import MoveValidator
from .win_checker import WinChecker, winning_lines
from .draw_checker import DrawChecker, is_forced_draw
from .turn_engine import TurnEngine
