"""
Game state for the TicTacToe engine.
Tracks the board, the selection cursor, whose turn it is and the result.
"""

from enum import Enum
from typing import List, Optional
from dataclasses import dataclass, field

from .board import Actor, Board, LineMasks, Position, derive_masks


class GameStatus(Enum):
    """Where the match stands. Anything but RUNNING is final."""
    RUNNING = 0
    DRAW = 1
    X_WINS = 2
    O_WINS = 3

    @property
    def is_over(self) -> bool:
        return self != GameStatus.RUNNING

    @classmethod
    def victory_for(cls, actor: Actor) -> "GameStatus":
        """Get the winning status for a side."""
        if actor == Actor.X:
            return cls.X_WINS
        if actor == Actor.O:
            return cls.O_WINS
        raise ValueError(f"{actor} cannot win a match")


@dataclass
class GameState:
    """
    The complete state of one match.

    Tracks:
    - The 3x3 board
    - The selection cursor (where the next move lands)
    - Side to move and the side that started
    - How many moves were played
    - Match status, and the winning line once somebody won
    """

    board: Board = field(default_factory=Board)

    # Cursor position, always inside the board
    selection: Position = Position(0, 0)

    # Side to move (X or O while running)
    turn: Actor = Actor.X

    # Moves played so far (0-9)
    moves_played: int = 0

    status: GameStatus = GameStatus.RUNNING

    # Side that moved first, recorded before move 0
    starter: Actor = Actor.NONE

    # Union of the completed lines, 0 unless somebody won
    winning_line: int = 0

    def masks(self) -> LineMasks:
        return derive_masks(self.board)

    def get_empty_cells(self) -> List[Position]:
        return self.board.free_cells()

    @property
    def winner(self) -> Optional[Actor]:
        if self.status == GameStatus.X_WINS:
            return Actor.X
        if self.status == GameStatus.O_WINS:
            return Actor.O
        return None

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        return GameState(
            board=self.board.copy(),
            selection=self.selection,
            turn=self.turn,
            moves_played=self.moves_played,
            status=self.status,
            starter=self.starter,
            winning_line=self.winning_line,
        )


class GameView:
    """
    Read-only window onto a live GameState.

    AI players and renderers get one of these, so they always see
    the current position without being able to change it.
    """

    def __init__(self, state: GameState):
        self._state = state

    @property
    def selection(self) -> Position:
        return self._state.selection

    @property
    def turn(self) -> Actor:
        return self._state.turn

    @property
    def moves_played(self) -> int:
        return self._state.moves_played

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def starter(self) -> Actor:
        return self._state.starter

    @property
    def winning_line(self) -> int:
        return self._state.winning_line

    def cell(self, pos: Position):
        return self._state.board.cell(pos)

    def is_free(self, pos: Position) -> bool:
        return self._state.board.is_free(pos)

    def masks(self) -> LineMasks:
        return self._state.masks()

    def get_empty_cells(self) -> List[Position]:
        return self._state.get_empty_cells()
