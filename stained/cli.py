"""
Stained CLI - Command-line interface for the engine.

Usage:
    stained autoplay [--players N] [--repeats R] [--ai-levels 0,1]
                     [--seed S] [--rounds K] [--quiet] [--log-level LEVEL]

autoplay runs bot-only matches and prints per-match results followed
by aggregate statistics.
"""

import argparse
import logging
import os
import statistics
import sys
import time
from dataclasses import dataclass, field

from .bots import BotPolicy, create_policy
from .config import MAX_PLAYERS, MIN_PLAYERS, NUM_ROUNDS, GameConfig
from .engine_core import GameState, Reducer, init_game

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "STAINED_LOG_LEVEL"


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Stained - dice drafting rules engine",
        prog="stained",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    autoplay_parser = subparsers.add_parser("autoplay", help="Run bot-only matches")
    autoplay_parser.add_argument("--players", "-n", type=int, default=2, help="Number of players")
    autoplay_parser.add_argument("--repeats", "-r", type=int, default=1, help="Number of matches")
    autoplay_parser.add_argument(
        "--ai-levels",
        default="1",
        help="Comma separated bot level per seat, cycled if shorter (0 first legal, 1 random, 2 random with tools)",
    )
    autoplay_parser.add_argument("--seed", type=int, default=None, help="Seed for the first match")
    autoplay_parser.add_argument("--rounds", type=int, default=NUM_ROUNDS, help="Rounds per match")
    autoplay_parser.add_argument("--quiet", "-q", action="store_true", help="Only print statistics")
    autoplay_parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )

    args = parser.parse_args(argv)

    if args.command == "autoplay":
        configure_logging(args.log_level)
        cmd_autoplay(args)
    else:
        parser.print_help()
        sys.exit(1)


def configure_logging(level: str) -> None:
    """Configure root logging; exits on an unknown level name."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        print(f"Error: unknown log level {level!r}")
        sys.exit(1)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_levels(text: str, num_players: int) -> list[int]:
    """Parse '0,1' into one level per seat, cycling the list."""
    try:
        levels = [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid AI levels: {text!r}")
    if not levels:
        raise argparse.ArgumentTypeError("At least one AI level is required")
    return [levels[i % len(levels)] for i in range(num_players)]


@dataclass
class Series:
    """Running sample of one measurement."""
    values: list[float] = field(default_factory=list)

    def add(self, value: float) -> None:
        self.values.append(value)

    def summary(self) -> str:
        if not self.values:
            return "n/a"
        stddev = statistics.pstdev(self.values) if len(self.values) > 1 else 0.0
        return (
            f"min {min(self.values):.2f}  max {max(self.values):.2f}  "
            f"mean {statistics.mean(self.values):.2f}  stddev {stddev:.2f}"
        )


@dataclass
class Stats:
    """Aggregate statistics across autoplay matches."""
    num_players: int
    seconds: Series = field(default_factory=Series)
    top_score: Series = field(default_factory=Series)
    unfilled_cells: Series = field(default_factory=Series)
    wins: list[int] = field(default_factory=list)

    def __post_init__(self):
        self.wins = [0] * self.num_players

    def record(self, state: GameState, seconds: float) -> None:
        self.seconds.add(seconds)
        self.top_score.add(max(state.player_scores()))
        for player in state.players:
            self.unfilled_cells.add(player.empty_cell_count)
        for idx in state.winners():
            self.wins[idx] += 1

    def report(self) -> str:
        lines = [
            f"Matches:        {len(self.seconds.values)}",
            f"Seconds:        {self.seconds.summary()}",
            f"Top score:      {self.top_score.summary()}",
            f"Unfilled cells: {self.unfilled_cells.summary()}",
            "Wins:           " + ", ".join(f"P{i}={w}" for i, w in enumerate(self.wins)),
        ]
        return "\n".join(lines)


def play_match(
    state: GameState,
    bots: list[BotPolicy],
    reducer: Reducer | None = None,
    verbose: bool = False,
) -> GameState:
    """Drive a match with one bot per seat until it ends."""
    reducer = reducer or Reducer()
    while not state.is_finished():
        seat = state.curr_player_idx
        action = bots[seat].choose_action(state)
        result = reducer.apply(state, action)
        if not result.success:
            raise RuntimeError(f"Bot {seat} submitted a rejected action {action}: {result.error}")
        if verbose:
            print(f"[round {state.current_round}] P{seat}: {action}")
    return state


def cmd_autoplay(args):
    """Run bot-only matches and print statistics."""
    if not MIN_PLAYERS <= args.players <= MAX_PLAYERS:
        print(f"Error: players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")
        sys.exit(1)
    try:
        levels = parse_levels(args.ai_levels, args.players)
        config = GameConfig(num_rounds=args.rounds)
    except (argparse.ArgumentTypeError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    stats = Stats(args.players)
    for match in range(args.repeats):
        seed = None if args.seed is None else args.seed + match
        bots = [
            create_policy(level, seed=None if seed is None else seed * MAX_PLAYERS + seat)
            for seat, level in enumerate(levels)
        ]
        logger.info("Match %d: seed=%s levels=%s", match, seed, levels)

        started = time.perf_counter()
        state = play_match(init_game(args.players, seed=seed, config=config), bots)
        elapsed = time.perf_counter() - started
        stats.record(state, elapsed)

        if not args.quiet:
            print(f"=== Match {match} (seed {seed}) ===")
            for seat, player in enumerate(state.players):
                name = player.selected_template.name if player.selected_template else "?"
                print(f"P{seat} [{name}] score {player.score(state.objectives)}")
                print(player.render())
            print(f"Winners: {', '.join(f'P{i}' for i in state.winners())}\n")

    print(stats.report())


if __name__ == "__main__":
    main()
