#!/usr/bin/env python3
"""
Island Sweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--noise] [--time-limit S]
    python main.py custom --rows R --cols C [--bombs B] [--noise]
    python main.py daily [--state-file PATH]
    python main.py advance-day [--state-file PATH]
    python main.py simulate [--games N] [--difficulty D] [--noise]
"""
import argparse
import logging
import sys
import time
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield import (  # noqa: E402
    BoardConfig,
    CustomGameSettings,
    Difficulty,
    GameSession,
    InvalidSettingsError,
    MinesweeperEnv,
    describe,
)
from minefield.environment import render_observation  # noqa: E402
from terrain import DailyChallenge, JsonSeedStore  # noqa: E402
from agents import RandomAgent  # noqa: E402


DEFAULT_STATE_FILE = Path.home() / ".island_sweeper" / "daily.json"

HELP_TEXT = (
    "Commands: c ROW COL (click), f ROW COL (flag), "
    "r ROW COL (reveal 3x3), b ROW COL (bomb 3x3), h (heal), q (quit)"
)


def _difficulty(name: str) -> Difficulty:
    return Difficulty[name.upper()]


# ============================================================================
# Interactive Play
# ============================================================================

def print_status(session: GameSession) -> None:
    """Print the board and the player's status."""
    state = session.get_state()
    print(render_observation(session.board.get_observation()))
    charges = state["charges"]
    line = (
        f"Health: {state['health']} | "
        f"Heal: {charges['heal']} Reveal: {charges['reveal']} "
        f"Bomb: {charges['bomb']} | "
        f"Flags: {state['flags_placed']}/{state['bombs']}"
    )
    if state["time_remaining"] is not None:
        line += f" | Time left: {state['time_remaining']}s"
    print(line)


def run_session(session: GameSession) -> None:
    """Read commands from stdin until the game ends."""
    print(HELP_TEXT)
    last_tick = time.monotonic()

    while not session.is_over:
        print_status(session)
        try:
            parts = input("> ").split()
        except EOFError:
            return

        elapsed = int(time.monotonic() - last_tick)
        if elapsed:
            session.tick(elapsed)
            last_tick += elapsed
            if session.is_over:
                break

        if not parts:
            continue
        command, args = parts[0].lower(), parts[1:]
        if command == "q":
            return
        if command == "h":
            if not session.use_heal():
                print("Cannot heal right now.")
            continue
        if command not in ("c", "f", "r", "b") or len(args) != 2:
            print(HELP_TEXT)
            continue
        try:
            row, col = int(args[0]), int(args[1])
        except ValueError:
            print("Row and column must be numbers.")
            continue

        if command == "c":
            cell = session.board.get_cell(row, col)
            picking_up = cell is not None and cell.has_icon
            kind = session.click(row, col)
            if kind is not None and picking_up:
                print(f"You collected a {kind.name} power-up: {describe(kind)}")
        elif command == "f":
            session.toggle_flag(row, col)
        elif command in ("r", "b") and session.board.first_click_pending:
            print("Click a cell before using area power-ups.")
        elif command == "r":
            if not session.use_reveal(row, col):
                print("No reveal power-ups left.")
        elif command == "b":
            if not session.use_bomb(row, col):
                print("No bomb power-ups left.")

    print_status(session)
    print("You Won!" if session.board.is_won else "Game Over")


def play(args: argparse.Namespace) -> None:
    """Play a preset game."""
    session = GameSession.new_game(
        _difficulty(args.difficulty),
        use_noise=args.noise,
        seed=args.seed,
        time_limit=args.time_limit,
    )
    run_session(session)


def custom(args: argparse.Namespace) -> None:
    """Play a custom game."""
    try:
        settings = CustomGameSettings.parse(
            args.rows, args.cols, args.bombs, use_noise=args.noise
        )
    except InvalidSettingsError as e:
        print(f"Invalid input: {e}")
        return
    print(
        f"Custom game: {settings.rows}x{settings.cols}"
        + ("" if settings.use_noise else f", {settings.num_bombs} bombs")
    )
    session = GameSession.custom_game(
        settings, seed=args.seed, time_limit=args.time_limit
    )
    run_session(session)


def daily(args: argparse.Namespace) -> None:
    """Play today's daily challenge."""
    challenge = DailyChallenge(JsonSeedStore(args.state_file))
    print(f"Daily challenge for {challenge.current_date().isoformat()}")
    run_session(GameSession.from_board(challenge.generate()))


def advance_day(args: argparse.Namespace) -> None:
    """Move the daily challenge to the next day."""
    challenge = DailyChallenge(JsonSeedStore(args.state_file))
    new_date = challenge.advance_day()
    print(f"Internal date advanced to: {new_date.isoformat()}")


# ============================================================================
# Simulation
# ============================================================================

def simulate(args: argparse.Namespace) -> None:
    """Let the random agent play a batch of games."""
    config = BoardConfig.for_difficulty(_difficulty(args.difficulty))
    env = MinesweeperEnv(config=config, use_noise=args.noise)
    agent = RandomAgent(config.rows, config.cols, seed=args.seed)

    wins = 0
    total_steps = 0
    total_revealed = 0

    print(f"Simulating {args.games} games on {config.rows}x{config.cols}...")
    obs, _ = env.reset(seed=args.seed)
    for _ in range(args.games):
        agent.reset()
        done = False
        info = {}
        steps = 0

        while not done and steps < args.max_steps:
            action = agent.select_action(obs, env.get_action_mask())
            obs, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            steps += 1

        if info.get("game_state") == "WON":
            wins += 1
        total_steps += steps
        total_revealed += info.get("revealed", 0)
        obs, _ = env.reset()

    print(f"Results for Random agent:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} cells")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Island Sweeper - Minesweeper with health, power-ups and islands"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    difficulties = ["easy", "medium", "hard"]

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a preset game")
    play_parser.add_argument("--difficulty", choices=difficulties, default="easy")
    play_parser.add_argument(
        "--noise", action="store_true", help="Use noise-based map generation"
    )
    play_parser.add_argument("--seed", type=int, default=None, help="Terrain seed")
    play_parser.add_argument(
        "--time-limit", type=int, default=None, help="Time limit in seconds"
    )

    # Custom command
    custom_parser = subparsers.add_parser("custom", help="Play a custom game")
    custom_parser.add_argument("--rows", default="16", help="Rows (9-24)")
    custom_parser.add_argument("--cols", default="30", help="Columns (9-40)")
    custom_parser.add_argument("--bombs", default="99", help="Bombs")
    custom_parser.add_argument("--noise", action="store_true")
    custom_parser.add_argument("--seed", type=int, default=None)
    custom_parser.add_argument("--time-limit", type=int, default=None)

    # Daily challenge commands
    for name, help_text in (
        ("daily", "Play today's daily challenge"),
        ("advance-day", "Advance the daily challenge date by one day"),
    ):
        daily_parser = subparsers.add_parser(name, help=help_text)
        daily_parser.add_argument(
            "--state-file", type=Path, default=DEFAULT_STATE_FILE,
            help="Where the daily seed is stored",
        )

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Let the random agent play"
    )
    simulate_parser.add_argument("--games", type=int, default=100)
    simulate_parser.add_argument("--difficulty", choices=difficulties, default="easy")
    simulate_parser.add_argument("--noise", action="store_true")
    simulate_parser.add_argument("--seed", type=int, default=None)
    simulate_parser.add_argument("--max-steps", type=int, default=500)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "custom":
        custom(args)
    elif args.command == "daily":
        daily(args)
    elif args.command == "advance-day":
        advance_day(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
