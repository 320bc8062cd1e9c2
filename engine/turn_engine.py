"""
Turn engine for the TicTacToe game.

Owns the authoritative GameState of one match. Every change to the
match goes through here: cursor moves, committed moves, and the
win / draw checks that follow each commit.
"""

from typing import Callable, Dict, Iterable, Optional

from .actions import CURSOR_STEPS, Action, InputSource
from .board import BOARD_SIZE, Actor, Position, count_bits
from .draw_checker import DrawChecker
from .game_state import GameState, GameView
from .move_validator import MoveValidator
from .win_checker import WinChecker


class TurnEngine:
    """
    State machine for one match.

    Match flow:
    1. The side to move supplies one Action
    2. Cursor actions move the selection (wrapping around the edges)
    3. MOVE puts the side's symbol on the selected cell, if it is free
    4. After each move: check for a winner, then for a forced draw
    5. Repeat until the match is over or somebody quits
    """

    def __init__(self, starter: Actor = Actor.X):
        """
        Start a new match.

        Args:
            starter: Which side moves first (X or O).
        """
        if starter not in (Actor.X, Actor.O):
            raise ValueError(f"Starter must be X or O, got {starter}")

        # The starter is fixed before move 0 and never changes
        self.state = GameState(turn=starter, starter=starter)
        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self.draw_checker = DrawChecker()

        self.quit_requested = False
        self.last_error: Optional[str] = None

    @property
    def view(self) -> GameView:
        return GameView(self.state)

    @property
    def is_running(self) -> bool:
        return not self.state.status.is_over and not self.quit_requested

    def apply(self, action: Action) -> bool:
        """
        Apply one action to the match.

        Args:
            action: The action to apply.

        Returns:
            False if the match should stop (quit or game over).
        """
        if action == Action.QUIT:
            self.quit_requested = True
            return False

        self.last_error = None
        if self.state.status.is_over:
            self.last_error = "Game is already over!"
            return False

        if action == Action.MOVE:
            self.commit_move()
        else:
            self.move_selection(action)

        return not self.state.status.is_over

    def move_selection(self, action: Action):
        """Move the cursor one cell, wrapping around the board edges."""
        d_col, d_row = CURSOR_STEPS[action]
        sel = self.state.selection
        self.state.selection = Position(
            (sel.col + d_col) % BOARD_SIZE,
            (sel.row + d_row) % BOARD_SIZE,
        )

    def select(self, pos: Position):
        """Put the cursor straight on a cell."""
        pos = Position(*pos)
        if not pos.is_valid():
            raise ValueError(f"Invalid position ({pos.col}, {pos.row}). Must be 0-2.")
        self.state.selection = pos

    def commit_move(self) -> bool:
        """
        Place the side to move on the selected cell.

        Taking an occupied cell is not an error; the move is
        just ignored and the same side keeps the turn.

        Returns:
            True if the move was made.
        """
        state = self.state
        result = self.validator.validate_move(state, state.selection)
        if not result.is_valid:
            self.last_error = result.error_message
            return False

        self.last_error = None
        state.board.set_cell(state.selection, state.turn)
        state.moves_played += 1
        state.turn = state.turn.opponent()

        # Only the side that just moved can have won, so the win
        # check goes first; a draw is only looked for after that
        self.win_checker.update_game_state(state)
        self.draw_checker.update_game_state(state)

        masks = state.masks()
        assert state.moves_played == count_bits(masks.x) + count_bits(masks.o)
        return True

    def play(self, pos: Position) -> bool:
        """Select a cell and commit a move there."""
        self.select(pos)
        return self.commit_move()

    def play_all(self, positions: Iterable[Position]) -> GameState:
        """Play a sequence of moves, alternating sides."""
        for pos in positions:
            self.play(pos)
        return self.state

    def step(self, source: InputSource) -> bool:
        """
        Poll one input source and apply its action.

        Args:
            source: Input source of the side to move.

        Returns:
            False if the match should stop.
        """
        return self.apply(source())

    def run(
        self,
        sources: Dict[Actor, InputSource],
        on_step: Optional[Callable[[GameView], None]] = None,
    ) -> GameState:
        """
        Play the match until it ends or somebody quits.

        Exactly one input source is polled per step: the one of the
        side to move.

        Args:
            sources: Input source for each side.
            on_step: Called with the game view before the first step
                and after every step (for rendering).

        Returns:
            The final game state.
        """
        if on_step is not None:
            on_step(self.view)

        while self.is_running:
            keep_going = self.step(sources[self.state.turn])
            if self.quit_requested:
                break
            if on_step is not None:
                on_step(self.view)
            if not keep_going:
                break

        return self.state
