"""
Human player for the TicTacToe game.
Maps key presses to actions.
"""

from typing import Callable, Optional

from engine.actions import Action
from .config import PlayerConfig


class HumanPlayer:
    """
    A human-controlled input source.

    Reads keys until one of them means something, then returns
    that action. Blocks for as long as the key reader does.
    """

    def __init__(
        self,
        read_key: Callable[[], Optional[str]],
        config: Optional[PlayerConfig] = None,
    ):
        """
        Initialize the human player.

        Args:
            read_key: Returns the next key name ("w", "enter", ...),
                or None when input has ended.
            config: Player configuration (key bindings).
        """
        self.read_key = read_key
        self.config = config or PlayerConfig()

    def __call__(self) -> Action:
        return self.next_action()

    def next_action(self) -> Action:
        while True:
            key = self.read_key()
            if key is None:
                # Input closed, nothing more will come
                return Action.QUIT

            action = self.config.KEY_BINDINGS.get(key.lower())
            if action is not None:
                return action
