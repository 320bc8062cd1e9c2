"""
Player configuration for the TicTacToe game.
AI pacing, key bindings and default opponents.
"""

from engine.actions import Action


class PlayerConfig:
    """
    Configuration for human and computer players.
    Change these values to tune how the game feels!
    """

    # ==================== AI PACING ====================
    # Delays make the computer look like it is moving a cursor.
    # They only affect presentation, never the chosen move.
    AI_DELAYS = True

    # Pause before picking a target cell (milliseconds, [min, max))
    AI_THINK_DELAY_MS = (300, 600)

    # Pause between two cursor steps (milliseconds, [min, max))
    AI_STEP_DELAY_MS = (100, 150)

    # Pause before committing the move (milliseconds)
    AI_COMMIT_DELAY_MS = 225

    # ==================== OPPONENTS ====================
    # Strategy used when none is given: "random" or "heuristic"
    DEFAULT_STRATEGY = "heuristic"

    # ==================== KEY BINDINGS ====================
    # Key names as produced by the console key reader
    KEY_BINDINGS = {
        "w": Action.UP,
        "up": Action.UP,
        "a": Action.LEFT,
        "left": Action.LEFT,
        "s": Action.DOWN,
        "down": Action.DOWN,
        "d": Action.RIGHT,
        "right": Action.RIGHT,
        "q": Action.QUIT,
        "escape": Action.QUIT,
        "backspace": Action.QUIT,
        "enter": Action.MOVE,
        "space": Action.MOVE,
    }

    def think_delay(self, rng) -> float:
        """Get a think delay in seconds."""
        low, high = self.AI_THINK_DELAY_MS
        return rng.uniform(low, high) / 1000

    def step_delay(self, rng) -> float:
        """Get a cursor step delay in seconds."""
        low, high = self.AI_STEP_DELAY_MS
        return rng.uniform(low, high) / 1000

    def commit_delay(self) -> float:
        return self.AI_COMMIT_DELAY_MS / 1000
