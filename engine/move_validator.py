"""
Move validator for the TicTacToe engine.
Validates that moves follow the rules.
"""

from typing import Optional
from dataclasses import dataclass

from .board import Position
from .game_state import GameState


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Can only place on empty cells

    The selection is always on the board, so no range check here.
    """

    def validate_move(self, game_state: GameState, pos: Position) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            pos: Cell the side to move wants to take.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if game_state.status.is_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if not game_state.board.is_free(pos):
            owner = game_state.board.cell(pos).name
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell ({pos.col}, {pos.row}) is already occupied by {owner}"
            )

        return ValidationResult(is_valid=True)
