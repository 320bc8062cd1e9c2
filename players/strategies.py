"""
Decision strategies for computer players.

A strategy looks at a read-only view of the match and names the
free cell it wants to take. It never moves the cursor itself; the
AIPlayer walks there one step at a time.
"""

from enum import Enum
from typing import List, Optional

import numpy as np

from engine.board import (
    BOARD_SIZE,
    WIN_PATTERNS,
    Position,
    count_bits,
    coordinates_of,
    is_pure,
)
from engine.game_state import GameView


class Strategy:
    """Base class for computer strategies."""

    name = "strategy"

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize the strategy.

        Args:
            rng: Random generator used for tie-breaking.
        """
        self.rng = rng if rng is not None else np.random.default_rng()

    def decide(self, view: GameView) -> Position:
        """
        Pick the cell to play.

        Args:
            view: Current match, read-only.

        Returns:
            A currently free cell.
        """
        raise NotImplementedError


class RandomStrategy(Strategy):
    """
    Plays a uniformly random free cell.

    Draws random (col, row) pairs until one lands on a free cell.
    """

    name = "random"

    def decide(self, view: GameView) -> Position:
        assert view.get_empty_cells(), "no free cell to decide on"

        while True:
            col, row = self.rng.integers(0, BOARD_SIZE, size=2)
            pos = Position(int(col), int(row))
            if view.is_free(pos):
                return pos


class MoveOptions:
    """A pool of candidate cells. Each cell is offered once."""

    def __init__(self):
        self.moves: List[Position] = []
        self._stored = 0

    def __len__(self) -> int:
        return len(self.moves)

    def push(self, pos: Position):
        if not self._stored & pos.bit:
            self._stored |= pos.bit
            self.moves.append(pos)

    def push_mask(self, mask: int):
        for pos in coordinates_of(mask):
            self.push(pos)

    def pick(self, rng: np.random.Generator) -> Optional[Position]:
        """Pick a cell uniformly at random, or None if the pool is empty."""
        if not self.moves:
            return None
        if len(self.moves) == 1:
            return self.moves[0]
        return self.moves[int(rng.integers(len(self.moves)))]


class HeuristicStrategy(Strategy):
    """
    Block-or-win player.

    Looks at each of the 8 lines once, with no look-ahead:
    - Two of mine and none of theirs: take the last cell and win
    - Two of theirs and none of mine: that cell goes to the danger pool
    - One of theirs and none of mine: its free cells are neutral moves
    - Anything else (I'm already there, or they aren't): low priority

    Then blocks a threat if there is one, else plays a neutral move,
    else anything from the low priority pool. A fork beats it.
    """

    name = "heuristic"

    @staticmethod
    def _can_finish(testing: int, opponent: int) -> bool:
        return count_bits(testing) == 2 and is_pure(testing, opponent)

    @staticmethod
    def _is_potentially_useless(mine: int, theirs: int) -> bool:
        return not is_pure(theirs, mine) or count_bits(theirs) == 0

    def decide(self, view: GameView) -> Position:
        me = view.turn
        masks = view.masks()
        all_mine = masks.of(me)
        all_theirs = masks.of(me.opponent())

        danger_cells = MoveOptions()
        neutral_moves = MoveOptions()
        low_priority = MoveOptions()

        for pattern in WIN_PATTERNS:
            mine = all_mine & pattern
            theirs = all_theirs & pattern

            if self._can_finish(mine, theirs):
                return coordinates_of(mine ^ pattern)[0]

            if self._is_potentially_useless(mine, theirs):
                low_priority.push_mask(pattern & masks.free)
                continue

            if self._can_finish(theirs, mine):
                danger_cells.push_mask(theirs ^ pattern)
                continue

            neutral_moves.push_mask(theirs ^ pattern)

        for options in (danger_cells, neutral_moves, low_priority):
            if options:
                return options.pick(self.rng)

        raise AssertionError("no free cell to decide on")


class StrategyKind(Enum):
    """The strategies a computer side can use."""
    RANDOM = "random"
    HEURISTIC = "heuristic"


STRATEGIES = {
    StrategyKind.RANDOM: RandomStrategy,
    StrategyKind.HEURISTIC: HeuristicStrategy,
}


def create_strategy(kind, rng: Optional[np.random.Generator] = None) -> Strategy:
    """
    Build a strategy from its kind.

    Args:
        kind: A StrategyKind or its name ("random", "heuristic").
        rng: Random generator for the strategy.

    Returns:
        The new strategy.
    """
    try:
        kind = StrategyKind(kind)
    except ValueError:
        raise ValueError(f"Unknown strategy: {kind}") from None
    return STRATEGIES[kind](rng)
