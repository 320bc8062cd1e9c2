"""
Test script for the TicTacToe modules.
Run this to verify all components work before playing.

    python test_modules.py      # every test file, with a summary
    pytest                      # same tests through pytest
"""

import io
import sys
from contextlib import redirect_stderr, redirect_stdout

from engine.actions import Action
from engine.board import Actor, Position
from engine.game_state import GameStatus
from engine.turn_engine import TurnEngine
from engine.win_checker import winning_lines
from main import ConsoleKeyReader, TicTacToeMatch, describe_status, format_board, main, simulate
from players.human_player import HumanPlayer


def lines_reader(lines):
    """Fake input(): hands out the given lines, then end of input."""
    remaining = iter(lines)

    def read_line(prompt):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None
    return read_line


# ==================== CONSOLE INPUT ====================

def test_key_reader_splits_lines():
    reader = ConsoleKeyReader(read_line=lines_reader(["dd", "", "w s", "Q"]))
    keys = [reader() for _ in range(8)]
    assert keys == ["d", "d", "enter", "w", "space", "s", "Q", None]


def test_key_reader_arrow_keys():
    lines = ["\x1b[D", "\x1b[A", "\x1b[B\x1b[C", "\x1bOA", "\x1b", "\x1bd"]
    reader = ConsoleKeyReader(read_line=lines_reader(lines))
    keys = [reader() for _ in range(9)]
    assert keys == ["left", "up", "down", "right", "up", "escape", "escape", "d", None]


def test_arrow_keys_drive_human_player():
    lines = ["\x1b[D", "\x1b[A", "\x1b[B", "\x1b[C", "\x1b"]
    human = HumanPlayer(ConsoleKeyReader(read_line=lines_reader(lines)))
    actions = [human() for _ in range(5)]
    assert actions == [Action.LEFT, Action.UP, Action.DOWN, Action.RIGHT, Action.QUIT]


# ==================== BOARD DISPLAY ====================

def test_format_board_marks_cursor_and_line():
    engine = TurnEngine()
    engine.play_all([Position(0, 0), Position(0, 1), Position(1, 0),
                     Position(1, 1), Position(2, 0)])

    text = format_board(engine.view, engine.state.winning_line, show_cursor=False)
    rows = text.splitlines()
    assert rows[2] == "0 │*X*│*X*│*X*│"
    assert rows[4] == "1 │ O │ O │   │"

    text = format_board(TurnEngine().view)
    assert text.splitlines()[2] == "0 │[ ]│   │   │"


def test_describe_status():
    engine = TurnEngine(Actor.O)
    assert describe_status(engine.view) == "Turn: O    Moves: 0"

    engine.play_all([Position(0, 0), Position(1, 0), Position(1, 2),
                     Position(2, 2), Position(2, 1), Position(0, 1)])
    assert describe_status(engine.view) == "It's a DRAW! (6 moves)"


# ==================== MATCHES ====================

def test_two_player_match():
    keys = iter([
        "enter",                # X (0,0)
        "s", "enter",           # O (0,1)
        "w", "d", "enter",      # X (1,0)
        "s", "space",           # O (1,1)
        "w", "d", "enter",      # X (2,0)
    ])
    match = TicTacToeMatch(mode="pvp", starter=Actor.X, quiet=True,
                           read_key=lambda: next(keys))
    state = match.start()

    assert state.status == GameStatus.X_WINS
    assert state.winning_line == 0o007


def test_early_draw_match_prints_fill():
    lines = ["", "d", "", "ss", "", "d", "", "w", "", "aa", ""]
    match = TicTacToeMatch(mode="pvp", starter=Actor.X, seed=4,
                           read_key=ConsoleKeyReader(read_line=lines_reader(lines)))
    out = io.StringIO()
    with redirect_stdout(out):
        state = match.start()

    assert state.status == GameStatus.DRAW
    assert state.moves_played == 6

    # The board printed after the notice is the filled one
    text = out.getvalue()
    notice = "No line can be completed with 3 cells left:"
    assert notice in text
    board_rows = [line for line in text.split(notice)[1].splitlines() if "│" in line]
    cells = [mark.strip() for row in board_rows for mark in row.split("│")[1:4]]
    assert len(cells) == 9
    assert sorted(cells) == ["O"] * 4 + ["X"] * 5

    x = sum(1 << i for i, mark in enumerate(cells) if mark == "X")
    o = sum(1 << i for i, mark in enumerate(cells) if mark == "O")
    assert winning_lines(x) == 0
    assert winning_lines(o) == 0


def test_quit_ends_match():
    match = TicTacToeMatch(mode="pvc", human=Actor.X, starter=Actor.X,
                           quiet=True, read_key=lambda: "q")
    state = match.start()

    assert match.engine.quit_requested
    assert state.status == GameStatus.RUNNING
    assert state.moves_played == 0


def test_human_against_computer():
    # Human O only ever quits; the computer X moves first
    match = TicTacToeMatch(mode="pvc", human=Actor.O, starter=Actor.X,
                           fast=True, quiet=True, seed=5, read_key=lambda: "escape")
    state = match.start()

    assert state.moves_played == 1
    assert match.engine.quit_requested


def test_computer_match():
    match = TicTacToeMatch(mode="cvc", x_strategy="random", o_strategy="heuristic",
                           seed=11, fast=True, quiet=True)
    state = match.start()
    assert state.status.is_over


def test_bad_mode():
    try:
        TicTacToeMatch(mode="online")
    except ValueError:
        return
    assert False, "expected ValueError"


def test_simulate_tally():
    tally = simulate(30, "heuristic", "random", seed=2)
    assert tally["x_wins"] + tally["o_wins"] + tally["draws"] == 30
    assert 0 <= tally["early_draws"] <= tally["draws"]


def test_games_needs_cvc_mode():
    for argv in (["--games", "3"], ["--mode", "pvp", "--games", "2"],
                 ["--mode", "cvc", "--games", "0"]):
        try:
            with redirect_stderr(io.StringIO()):
                main(argv)
        except SystemExit as e:
            assert e.code == 2
            continue
        assert False, f"expected usage error for {argv}"


def test_simulate_is_repeatable():
    assert simulate(10, "random", "random", seed=9) == simulate(10, "random", "random", seed=9)


# ==================== RUNNER ====================

def run_all_tests():
    """Run all tests."""
    import test_engine
    import test_players

    print("=" * 60)
    print("   TicTacToe - Module Tests")
    print("=" * 60)

    results = {}
    for module in (test_engine, test_players, sys.modules[__name__]):
        for name in dir(module):
            fn = getattr(module, name)
            if name.startswith("test_") and callable(fn):
                try:
                    fn()
                    results[f"{module.__name__}.{name}"] = True
                except AssertionError as e:
                    print(f"  ✗ {name}: {e}")
                    results[f"{module.__name__}.{name}"] = False

    print("\n" + "=" * 60)
    print("   Test Results")
    print("=" * 60)

    all_passed = True
    for name, passed in results.items():
        status = "✓ PASS" if passed else "✗ FAIL"
        print(f"  {name}: {status}")
        if not passed:
            all_passed = False

    print("=" * 60)

    if all_passed:
        print("\nAll tests passed! Ready to play TicTacToe.\n")
        return 0
    else:
        print("\nSome tests failed. Check the errors above.\n")
        return 1


if __name__ == "__main__":
    sys.exit(run_all_tests())
