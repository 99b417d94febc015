"""Command-line entry points: run the AI for a referee, or play local matches."""

from __future__ import annotations

import argparse
import random
import statistics
import sys
from typing import Sequence

from pydantic import ValidationError

from seabattle.config import DEFAULT_SHIP_LENGTHS, AiConfig
from seabattle.engine.ai import TargetingAi
from seabattle.engine.errors import SeaBattleError
from seabattle.protocol import StdioPort
from seabattle.referee import LocalPort, random_fleet
from seabattle.runner import SessionReport, run_session
from seabattle.telemetry import configure_logging, init_telemetry, shutdown_tracing


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seabattle", description="Battleship targeting AI.")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible targeting.")
    parser.add_argument("--log-level", default=None, help="Logging level (logs go to stderr).")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("play", help="Talk to a referee over stdin/stdout (default).")

    simulate = commands.add_parser("simulate", help="Play matches against random local fleets.")
    simulate.add_argument("--width", type=_positive_int, default=10)
    simulate.add_argument("--height", type=_positive_int, default=10)
    simulate.add_argument(
        "--ships",
        type=_positive_int,
        nargs="+",
        default=list(DEFAULT_SHIP_LENGTHS),
        help="Ship lengths, e.g. --ships 4 3 3 2 2 2 1 1 1 1",
    )
    simulate.add_argument("--games", type=_positive_int, default=1)
    simulate.add_argument("--show", action="store_true", help="Print the last match's final grid.")
    return parser


def play(ai: TargetingAi) -> SessionReport:
    return run_session(StdioPort(sys.stdin, sys.stdout), ai)


def simulate(
    ai: TargetingAi,
    width: int,
    height: int,
    ships: Sequence[int],
    games: int,
    show: bool = False,
) -> SessionReport:
    fleet_rng = random.Random(ai.rng.randrange(2**31))
    fleets = [random_fleet(width, height, ships, fleet_rng) for _ in range(games)]
    report = run_session(LocalPort(fleets), ai)

    shots = [match.shots for match in report.matches]
    print(f"games={len(shots)} board={width}x{height} ships={' '.join(map(str, ships))}")
    print(
        f"shots: mean={statistics.mean(shots):.2f} min={min(shots)} max={max(shots)}"
        f" unfinished={sum(not match.finished for match in report.matches)}"
    )
    if show:
        print("\nfleet:")
        print(fleets[-1].render())
        print("\nshooter's view:")
        print(ai.match.grid.render())
    return report


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = AiConfig.from_env(seed=args.seed, log_level=args.log_level)
    except ValidationError as exc:
        parser.error(str(exc))

    configure_logging(config.log_level)
    init_telemetry()
    ai = TargetingAi(seed=config.seed)
    try:
        if args.command == "simulate":
            simulate(ai, args.width, args.height, args.ships, args.games, args.show)
        else:
            play(ai)
    except SeaBattleError as exc:
        print(f"seabattle: {exc}", file=sys.stderr)
        return 1
    finally:
        shutdown_tracing()
    return 0


if __name__ == "__main__":
    sys.exit(main())
