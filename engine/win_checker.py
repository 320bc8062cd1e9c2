"""
Win checker for the TicTacToe engine.
Checks if a side has completed a line.
"""

from .board import WIN_PATTERNS, Actor
from .game_state import GameState, GameStatus


# No line can be complete before the starter has placed 3 pieces
FIRST_POSSIBLE_WIN = 5


def winning_lines(mask: int) -> int:
    """
    Get every winning pattern fully contained in a mask.

    Args:
        mask: Cells owned by one side.

    Returns:
        The OR of all completed patterns, or 0 if there are none.
    """
    result = 0
    for pattern in WIN_PATTERNS:
        if mask & pattern == pattern:
            result |= pattern
    return result


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells of the same side in a row
    (horizontally, vertically, or diagonally)
    """

    def check_winner(self, game_state: GameState) -> Actor:
        """
        Check if there's a winner.

        Args:
            game_state: The current game state.

        Returns:
            The winning Actor, or Actor.NONE if no winner yet.
        """
        masks = game_state.masks()
        x_lines = winning_lines(masks.x)
        o_lines = winning_lines(masks.o)

        # Turns alternate, so X and O can never both have a line
        assert not (x_lines and o_lines), "both sides completed a line"

        if x_lines:
            return Actor.X
        if o_lines:
            return Actor.O
        return Actor.NONE

    def get_winning_line(self, game_state: GameState) -> int:
        """
        Get the completed lines of the winner.

        Returns:
            The winning line mask (several lines OR'ed together when
            the last move completed more than one), or 0.
        """
        winner = self.check_winner(game_state)
        if winner == Actor.NONE:
            return 0
        return winning_lines(game_state.masks().of(winner))

    def update_game_state(self, game_state: GameState) -> GameState:
        """
        Update the game state with winner information.

        Does nothing before move 5 or once the match is over.

        Args:
            game_state: The game state to update.

        Returns:
            Updated game state.
        """
        if game_state.status.is_over:
            return game_state
        if game_state.moves_played < FIRST_POSSIBLE_WIN:
            return game_state

        winner = self.check_winner(game_state)
        if winner != Actor.NONE:
            game_state.status = GameStatus.victory_for(winner)
            game_state.winning_line = self.get_winning_line(game_state)

        return game_state
