"""
Forced draw checker for the TicTacToe engine.

Ends the match early when it can be proven that neither side can
still complete a line, instead of waiting for the board to fill.

For every free cell, each line crossing it is tested for both sides:
a side can still win the line only if the opponent owns none of it
(purity) and the side already holds enough cells there to finish it
with the moves it has left. The scan stops at the first line that
passes; if none does, the position is a draw.

This is a cheap necessary condition, not a game tree search. It never
calls a winnable position drawn, but it only knows this 3x3 game.
"""

from typing import List, Tuple

import numpy as np

from .board import Actor, LineMasks, Position, count_bits, coordinates_of, is_pure, patterns_through
from .game_state import GameState, GameStatus


# The earliest move count at which a draw can be proven
FIRST_POSSIBLE_DRAW = 6

# Pieces each side gets over a full 9-move match
STARTER_PIECES = 5
SECOND_PIECES = 4


def min_moves_to_win(is_starter: bool, moves_played: int) -> int:
    """
    Get how many cells a side must already hold on a line to finish it.

    The starter moves on odd move numbers (1, 3, ...), so after
    `moves_played` moves it has placed moves_played - moves_played // 2
    pieces; the other side has placed moves_played // 2.

    Args:
        is_starter: True for the side that moved first.
        moves_played: Moves played so far.

    Returns:
        3 minus the number of moves this side has left.
    """
    if is_starter:
        remaining = STARTER_PIECES - (moves_played - moves_played // 2)
    else:
        remaining = SECOND_PIECES - moves_played // 2
    return 3 - remaining


def is_forced_draw(masks: LineMasks, moves_played: int, starter: Actor) -> bool:
    """
    Check that no line can still be completed by either side.

    Args:
        masks: Free / X / O masks of the board.
        moves_played: Moves played so far.
        starter: The side that moved first.

    Returns:
        True if the match is a draw. A full board is always a draw here;
        the caller checks for a winner first.
    """
    if starter not in (Actor.X, Actor.O):
        raise ValueError(f"Starter must be X or O, got {starter}")

    x_min = min_moves_to_win(starter == Actor.X, moves_played)
    o_min = min_moves_to_win(starter == Actor.O, moves_played)

    for pos in coordinates_of(masks.free):
        for pattern in patterns_through(pos):
            x_line = masks.x & pattern
            o_line = masks.o & pattern

            can_x_win = is_pure(x_line, o_line) and count_bits(x_line) >= x_min
            can_o_win = is_pure(o_line, x_line) and count_bits(o_line) >= o_min

            if can_x_win or can_o_win:
                return False

    return True


class DrawChecker:
    """
    Checks for forced draws.

    Only runs from move 6, once no winner was found for the last move.
    """

    def check_draw(self, game_state: GameState) -> bool:
        """
        Check if the game is a (possibly early) draw.

        Args:
            game_state: The current game state.

        Returns:
            True if neither side can complete a line anymore.
        """
        if game_state.moves_played < FIRST_POSSIBLE_DRAW:
            return False
        return is_forced_draw(
            game_state.masks(),
            game_state.moves_played,
            game_state.starter,
        )

    def update_game_state(self, game_state: GameState) -> GameState:
        """
        Mark the game as drawn if a draw can be proven.

        Args:
            game_state: The game state to update.

        Returns:
            Updated game state.
        """
        if game_state.status.is_over:
            return game_state

        if self.check_draw(game_state):
            game_state.status = GameStatus.DRAW

        return game_state

    def fill_order(
        self,
        game_state: GameState,
        rng: np.random.Generator,
    ) -> List[Tuple[Position, Actor]]:
        """
        Get a random way to fill the cells left by an early draw.

        Renderers play this back as the end-of-game animation. The
        cells come in random order and the sides alternate, starting
        with the side to move. The game state itself is not touched.

        Args:
            game_state: A drawn game.
            rng: Random generator for the cell order.

        Returns:
            List of (position, actor) pairs, one per free cell.
        """
        free_cells = game_state.get_empty_cells()
        order = rng.permutation(len(free_cells))

        actor = game_state.turn
        filled = []
        for i in order:
            filled.append((free_cells[int(i)], actor))
            actor = actor.opponent()
        return filled
