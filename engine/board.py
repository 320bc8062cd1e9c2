"""
Board representation for the TicTacToe engine.
Holds the 3x3 grid and the 9-bit line mask utilities.

Bit layout of a LineMask (bit index = 3 * row + col):

     col 0   col 1   col 2
    +-------+-------+-------+
    |   0   |   1   |   2   |  row 0
    +-------+-------+-------+
    |   3   |   4   |   5   |  row 1
    +-------+-------+-------+
    |   6   |   7   |   8   |  row 2
    +-------+-------+-------+
"""

from enum import Enum
from typing import Iterable, List, NamedTuple


BOARD_SIZE = 3
FULL_MASK = 0x1FF

# The 8 winning lines, as line masks
WIN_PATTERNS = (
    # Rows
    0o007, 0o070, 0o700,
    # Columns
    0o111, 0o222, 0o444,
    # Diagonals
    0o421, 0o124,
)

MAIN_DIAGONAL = 6
ANTI_DIAGONAL = 7


class Cell(Enum):
    """What a board cell holds."""
    EMPTY = 0
    X = 1
    O = 2


class Actor(Enum):
    """A side of the game (NONE means nobody)."""
    NONE = 0
    X = 1
    O = 2

    def opponent(self) -> "Actor":
        """Get the other side. NONE has no opponent."""
        if self == Actor.X:
            return Actor.O
        if self == Actor.O:
            return Actor.X
        return Actor.NONE

    @property
    def cell(self) -> Cell:
        """The cell value this actor writes on the board."""
        return Cell(self.value)

    @property
    def symbol(self) -> str:
        return " " if self == Actor.NONE else self.name


class Position(NamedTuple):
    """A board coordinate. Column first, like the cursor moves."""
    col: int
    row: int

    @property
    def index(self) -> int:
        """Bit index of this position in a LineMask."""
        return self.row * BOARD_SIZE + self.col

    @property
    def bit(self) -> int:
        return 1 << self.index

    @classmethod
    def from_index(cls, index: int) -> "Position":
        if not 0 <= index < BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"Invalid cell index {index}. Must be 0-8.")
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    def is_valid(self) -> bool:
        return 0 <= self.col < BOARD_SIZE and 0 <= self.row < BOARD_SIZE


class LineMasks(NamedTuple):
    """The free / X / O masks of a board. They partition all 9 bits."""
    free: int
    x: int
    o: int

    def of(self, actor: Actor) -> int:
        """Get the mask of the cells owned by an actor."""
        if actor == Actor.X:
            return self.x
        if actor == Actor.O:
            return self.o
        return self.free


def count_bits(mask: int) -> int:
    """Number of cells set in a mask (0-9)."""
    count = 0
    for i in range(BOARD_SIZE * BOARD_SIZE):
        count += (mask >> i) & 1
    return count


def coordinates_of(mask: int) -> List[Position]:
    """
    Get the positions set in a mask.

    Args:
        mask: A LineMask.

    Returns:
        Positions in ascending bit index order (row by row).
    """
    return [
        Position.from_index(i)
        for i in range(BOARD_SIZE * BOARD_SIZE)
        if (mask >> i) & 1
    ]


def mask_of(positions: Iterable[Position]) -> int:
    """Build a mask with the given positions set."""
    mask = 0
    for pos in positions:
        mask |= Position(*pos).bit
    return mask


def is_pure(testing: int, opponent: int) -> bool:
    """
    Check if a side's cells on a line are "pure".

    A line is pure for the testing side when the opponent owns none
    of the cells (the union adds nothing to the testing mask).

    Args:
        testing: The testing side's mask, restricted to one line.
        opponent: The opponent's mask, restricted to the same line.
    """
    return (testing | opponent) == testing


def patterns_through(pos: Position) -> List[int]:
    """
    Get the winning patterns that cross a cell.

    Every cell has its row and column; cells on a diagonal
    also get that diagonal (the center gets both).
    """
    patterns = [WIN_PATTERNS[pos.row], WIN_PATTERNS[BOARD_SIZE + pos.col]]
    for diagonal in (MAIN_DIAGONAL, ANTI_DIAGONAL):
        if WIN_PATTERNS[diagonal] & pos.bit:
            patterns.append(WIN_PATTERNS[diagonal])
    return patterns


class Board:
    """
    The 3x3 grid of cells.

    Only the TurnEngine writes to the board of a running game,
    always after checking the target cell is empty.
    """

    def __init__(self):
        self.grid: List[List[Cell]] = [
            [Cell.EMPTY for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]

    def cell(self, pos: Position) -> Cell:
        return self.grid[pos.row][pos.col]

    def is_free(self, pos: Position) -> bool:
        return self.cell(pos) == Cell.EMPTY

    def set_cell(self, pos: Position, actor: Actor):
        """Write one cell. The caller checks that the cell is free."""
        self.grid[pos.row][pos.col] = actor.cell

    def masks(self) -> LineMasks:
        return derive_masks(self)

    def free_cells(self) -> List[Position]:
        return coordinates_of(self.masks().free)

    def copy(self) -> "Board":
        new_board = Board()
        new_board.grid = [list(row) for row in self.grid]
        return new_board

    @classmethod
    def from_masks(cls, x: int, o: int) -> "Board":
        """
        Rebuild a board from its X and O masks.

        Args:
            x: Cells owned by X.
            o: Cells owned by O. Must not overlap x.
        """
        if x & o:
            raise ValueError("X and O masks overlap")
        board = cls()
        for pos in coordinates_of(x):
            board.set_cell(pos, Actor.X)
        for pos in coordinates_of(o):
            board.set_cell(pos, Actor.O)
        return board

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __repr__(self) -> str:
        rows = ["".join(c.name if c != Cell.EMPTY else "." for c in row)
                for row in self.grid]
        return f"Board({'/'.join(rows)})"


def derive_masks(board: Board) -> LineMasks:
    """
    Split a board into its free / X / O masks in a single pass.

    Args:
        board: The board to read.

    Returns:
        LineMasks with three disjoint masks covering all 9 cells.
    """
    free = x = o = 0
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            bit = 1 << (row * BOARD_SIZE + col)
            cell = board.grid[row][col]
            if cell == Cell.X:
                x |= bit
            elif cell == Cell.O:
                o |= bit
            else:
                free |= bit

    assert free | x | o == FULL_MASK
    return LineMasks(free, x, o)
