"""
Actions and the input source contract.

Humans and computer players drive a match the same way: an input
source is any callable that returns the next Action, blocking until
it has one.
"""

from enum import Enum
from typing import Callable


class Action(Enum):
    """One step of input for the match."""
    QUIT = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    MOVE = 5


# Column / row offset of each cursor action
CURSOR_STEPS = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
}


InputSource = Callable[[], Action]
