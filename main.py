"""
Console front-end for the TicTacToe game.

This script ties together:
- Engine (board, turn engine, win and forced draw checks)
- Players (human keys, computer strategies)
- A plain print-based board display

Run this script to play TicTacToe in a terminal!
"""

import argparse
from typing import Callable, Dict, List, Optional

import numpy as np

from engine.actions import InputSource
from engine.board import BOARD_SIZE, Actor, Cell, Position
from engine.game_state import GameState, GameStatus, GameView
from engine.turn_engine import TurnEngine
from players.ai_player import AIPlayer
from players.config import PlayerConfig
from players.human_player import HumanPlayer
from players.strategies import StrategyKind, create_strategy


MODES = ("pvp", "pvc", "cvc")

ESCAPE = "\x1b"

# Terminal escape sequences for the arrow keys
ARROW_KEYS = {
    ESCAPE + "[A": "up",
    ESCAPE + "[B": "down",
    ESCAPE + "[C": "right",
    ESCAPE + "[D": "left",
    ESCAPE + "OA": "up",
    ESCAPE + "OB": "down",
    ESCAPE + "OC": "right",
    ESCAPE + "OD": "left",
}


def split_keys(line: str) -> List[str]:
    """
    Split a typed line into key names.

    Args:
        line: Raw line, possibly holding arrow key escape sequences.

    Returns:
        Key names in typing order: single characters, "space",
        "up" / "down" / "left" / "right" for arrows and "escape"
        for an escape that starts no arrow sequence.
    """
    keys = []
    i = 0
    while i < len(line):
        if line[i] == ESCAPE:
            arrow = ARROW_KEYS.get(line[i:i + 3])
            if arrow is not None:
                keys.append(arrow)
                i += 3
            else:
                keys.append("escape")
                i += 1
            continue
        keys.append("space" if line[i] == " " else line[i])
        i += 1
    return keys


class ConsoleKeyReader:
    """
    Reads keys from typed lines.

    Every character of a line is one key ("dd" moves right twice),
    arrow keys and escape come through by name, and an empty line
    is the enter key.
    """

    def __init__(self, prompt: str = "> ", read_line: Callable[[str], str] = input):
        self.prompt = prompt
        self.read_line = read_line
        self.pending: List[str] = []

    def __call__(self) -> Optional[str]:
        if not self.pending:
            try:
                line = self.read_line(self.prompt)
            except EOFError:
                return None
            if line == "":
                return "enter"
            self.pending = split_keys(line)
        return self.pending.pop(0)


def format_board(view: GameView, highlight: int = 0, show_cursor: bool = True) -> str:
    """
    Draw the board as text.

    Args:
        view: The match to draw.
        highlight: Mask of cells to mark with asterisks.
        show_cursor: Mark the selected cell with brackets.

    Returns:
        The board, several lines.
    """
    lines = ["    0   1   2", "  ┌───┬───┬───┐"]
    for row in range(BOARD_SIZE):
        row_str = "│"
        for col in range(BOARD_SIZE):
            pos = Position(col, row)
            cell = view.cell(pos)
            mark = " " if cell == Cell.EMPTY else cell.name
            if show_cursor and pos == view.selection:
                row_str += f"[{mark}]│"
            elif highlight & pos.bit:
                row_str += f"*{mark}*│"
            else:
                row_str += f" {mark} │"
        lines.append(f"{row} {row_str}")
        if row < BOARD_SIZE - 1:
            lines.append("  ├───┼───┼───┤")
    lines.append("  └───┴───┴───┘")
    return "\n".join(lines)


def describe_status(view: GameView) -> str:
    if view.status == GameStatus.RUNNING:
        return f"Turn: {view.turn.symbol}    Moves: {view.moves_played}"
    if view.status == GameStatus.DRAW:
        return f"It's a DRAW! ({view.moves_played} moves)"
    winner = "X" if view.status == GameStatus.X_WINS else "O"
    return f"{winner} WINS! ({view.moves_played} moves)"


class TicTacToeMatch:
    """
    Main controller for one console match.

    Game flow:
    1. Pick who starts (random unless told otherwise)
    2. Poll the side to move for one action and apply it
    3. Redraw the board after every action
    4. Repeat until someone wins, a draw is proven, or someone quits
    """

    def __init__(
        self,
        mode: str = "pvc",
        human: Actor = Actor.X,
        x_strategy: str = PlayerConfig.DEFAULT_STRATEGY,
        o_strategy: str = PlayerConfig.DEFAULT_STRATEGY,
        starter: Optional[Actor] = None,
        seed: Optional[int] = None,
        fast: bool = False,
        quiet: bool = False,
        read_key: Optional[Callable[[], Optional[str]]] = None,
    ):
        """
        Set up a match.

        Args:
            mode: "pvp", "pvc" or "cvc".
            human: Side played by the human in "pvc" mode.
            x_strategy: Strategy for a computer X.
            o_strategy: Strategy for a computer O.
            starter: Side moving first. Random if None.
            seed: Seed for all random choices.
            fast: Turn off the AI pacing delays.
            quiet: Don't print anything.
            read_key: Key reader for human players.
        """
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode}. Must be one of {MODES}.")

        self.mode = mode
        self.quiet = quiet
        self.config = PlayerConfig()
        self.rng = np.random.default_rng(seed)

        if starter is None:
            starter = Actor.X if self.rng.integers(2) == 0 else Actor.O
        self.engine = TurnEngine(starter)

        humans = {
            "pvp": (Actor.X, Actor.O),
            "pvc": (human,),
            "cvc": (),
        }[mode]
        kinds = {Actor.X: StrategyKind(x_strategy), Actor.O: StrategyKind(o_strategy)}

        human_player = HumanPlayer(read_key or ConsoleKeyReader(), self.config)
        self.sources: Dict[Actor, InputSource] = {}
        for actor in (Actor.X, Actor.O):
            if actor in humans:
                self.sources[actor] = human_player
            else:
                strategy = create_strategy(kinds[actor], self.rng)
                self.sources[actor] = AIPlayer(
                    strategy,
                    self.engine.view,
                    self.config,
                    pace=self.config.AI_DELAYS and not fast,
                )

    @property
    def state(self) -> GameState:
        return self.engine.state

    def _print(self, *args):
        if not self.quiet:
            print(*args)

    def _render(self, view: GameView):
        if self.quiet:
            return
        print()
        print(format_board(view, view.winning_line, show_cursor=not view.status.is_over))
        print(describe_status(view))
        if self.engine.last_error:
            print(f"  {self.engine.last_error}")

    def start(self) -> GameState:
        """Play the match and show the result."""
        self._print("\n" + "=" * 40)
        self._print(f"   {self.engine.state.starter.symbol} starts!")
        if self.mode != "cvc":
            self._print("   Keys: w a s d or arrows to move, enter or space to mark, q to quit")
        self._print("=" * 40)

        self.engine.run(self.sources, on_step=self._render)

        self._show_game_result()
        return self.engine.state

    def _show_game_result(self):
        """Show the final game result."""
        state = self.engine.state
        if self.engine.quit_requested:
            self._print("\nGame quit.")
            return

        self._print("\n" + "=" * 40)
        self._print("   GAME OVER!")
        self._print("=" * 40)

        if state.status == GameStatus.DRAW and state.get_empty_cells():
            self._show_draw_fill()

    def _show_draw_fill(self):
        """Fill the leftover cells of an early draw to show nobody could win."""
        state = self.engine.state
        self._print(f"\nNo line can be completed with {len(state.get_empty_cells())} cells left:")

        filled = state.copy()
        for pos, actor in self.engine.draw_checker.fill_order(state, self.rng):
            filled.board.set_cell(pos, actor)

        self._print(format_board(GameView(filled), show_cursor=False))


def simulate(
    games: int,
    x_strategy: str = PlayerConfig.DEFAULT_STRATEGY,
    o_strategy: str = PlayerConfig.DEFAULT_STRATEGY,
    seed: Optional[int] = None,
) -> Dict[str, int]:
    """
    Play many computer-vs-computer matches without pacing.

    Args:
        games: Number of matches.
        x_strategy: Strategy for X.
        o_strategy: Strategy for O.
        seed: Seed for the whole batch.

    Returns:
        Counts of "x_wins", "o_wins", "draws" and "early_draws"
        (draws proven before the board was full).
    """
    rng = np.random.default_rng(seed)
    # x wins, o wins, draws, early draws
    tally = np.zeros(4, dtype=np.int64)

    for _ in range(games):
        match = TicTacToeMatch(
            mode="cvc",
            x_strategy=x_strategy,
            o_strategy=o_strategy,
            seed=int(rng.integers(2**32)),
            fast=True,
            quiet=True,
        )
        state = match.start()

        if state.status == GameStatus.X_WINS:
            tally[0] += 1
        elif state.status == GameStatus.O_WINS:
            tally[1] += 1
        elif state.status == GameStatus.DRAW:
            tally[2] += 1
            if state.moves_played < BOARD_SIZE * BOARD_SIZE:
                tally[3] += 1

    return dict(zip(("x_wins", "o_wins", "draws", "early_draws"), tally.tolist()))


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Terminal TicTacToe")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="pvc",
        help="pvp: two humans, pvc: human vs computer, cvc: computer vs computer"
    )
    parser.add_argument(
        "--human",
        choices=["x", "o"],
        default="x",
        help="Side played by the human in pvc mode"
    )
    parser.add_argument(
        "--x-strategy",
        choices=[k.value for k in StrategyKind],
        default=PlayerConfig.DEFAULT_STRATEGY,
        help="Strategy of a computer X"
    )
    parser.add_argument(
        "--o-strategy",
        choices=[k.value for k in StrategyKind],
        default=PlayerConfig.DEFAULT_STRATEGY,
        help="Strategy of a computer O"
    )
    parser.add_argument(
        "--starter",
        choices=["x", "o", "random"],
        default="random",
        help="Side that moves first"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of matches to simulate, cvc mode only (more than 1 runs a silent batch)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Don't slow down computer moves"
    )

    args = parser.parse_args(argv)

    if args.games < 1:
        parser.error("--games must be at least 1")
    if args.games > 1 and args.mode != "cvc":
        parser.error("--games only applies to --mode cvc")

    if args.mode == "cvc" and args.games > 1:
        print(f"\nSimulating {args.games} games: X={args.x_strategy} vs O={args.o_strategy}")
        tally = simulate(args.games, args.x_strategy, args.o_strategy, args.seed)
        print(f"  X wins: {tally['x_wins']}")
        print(f"  O wins: {tally['o_wins']}")
        print(f"  Draws:  {tally['draws']} ({tally['early_draws']} proven early)")
        return

    starter = None if args.starter == "random" else Actor[args.starter.upper()]

    match = TicTacToeMatch(
        mode=args.mode,
        human=Actor[args.human.upper()],
        x_strategy=args.x_strategy,
        o_strategy=args.o_strategy,
        starter=starter,
        seed=args.seed,
        fast=args.fast,
    )

    try:
        match.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
