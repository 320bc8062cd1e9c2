"""
Players module for the TicTacToe game.
Human and computer input sources, and the computer strategies.
"""

from .config import PlayerConfig
from .strategies import HeuristicStrategy, RandomStrategy, Strategy, StrategyKind, create_strategy
from .ai_player import AIPlayer
from .human_player import HumanPlayer
