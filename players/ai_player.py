"""
AI player for the TicTacToe game.
Turns a strategy's chosen cell into cursor actions, like a human would.
"""

import time
from typing import Optional

import numpy as np

from engine.actions import Action
from engine.board import Position
from engine.game_state import GameView
from .config import PlayerConfig
from .strategies import Strategy


class AIPlayer:
    """
    A computer-controlled input source.

    Each call returns one Action:
    - With no target yet, ask the strategy for one (the only "thinking")
    - On the target cell: MOVE, and forget the target
    - Otherwise: one cursor step towards the target, along the axis
      with the larger distance (vertical when they are equal)
    """

    def __init__(
        self,
        strategy: Strategy,
        view: GameView,
        config: Optional[PlayerConfig] = None,
        pace: Optional[bool] = None,
        verbose: bool = False,
    ):
        """
        Initialize the AI player.

        Args:
            strategy: Decides which cell to play.
            view: Read-only view of the match being played.
            config: Player configuration (pacing delays).
            pace: Sleep between actions. Defaults to config.AI_DELAYS.
            verbose: Print each decision.
        """
        self.strategy = strategy
        self.view = view
        self.config = config or PlayerConfig()
        self.pace = self.config.AI_DELAYS if pace is None else pace
        self.verbose = verbose

        # Cell we are walking to, None while undecided
        self.target: Optional[Position] = None

        # Separate generator so pacing never changes the moves chosen
        self._delay_rng = np.random.default_rng()

    def __call__(self) -> Action:
        return self.next_action()

    @property
    def is_thinking(self) -> bool:
        return self.target is None

    def think(self):
        """Ask the strategy for a target cell."""
        if self.pace:
            time.sleep(self.config.think_delay(self._delay_rng))

        target = self.strategy.decide(self.view)
        assert self.view.is_free(target), f"{self.strategy.name} picked taken cell {target}"
        self.target = target

        if self.verbose:
            print(f"AI ({self.view.turn.symbol}, {self.strategy.name}) "
                  f"goes for ({target.col}, {target.row})")

    def next_action(self) -> Action:
        """
        Get the next action towards the target cell.

        Returns:
            A cursor action, or MOVE once the cursor is on the target.
        """
        if self.is_thinking:
            self.think()

        if self.view.selection == self.target:
            if self.pace:
                time.sleep(self.config.commit_delay())
            self.target = None
            return Action.MOVE

        if self.pace:
            time.sleep(self.config.step_delay(self._delay_rng))
        return self.walk()

    def walk(self) -> Action:
        """Get one cursor step towards the target."""
        here = self.view.selection
        d_col = self.target.col - here.col
        d_row = self.target.row - here.row

        if abs(d_col) > abs(d_row):
            return Action.LEFT if d_col < 0 else Action.RIGHT
        return Action.UP if d_row < 0 else Action.DOWN
