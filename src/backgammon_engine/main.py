"""Command-line entrypoint for backgammon-engine.

Provides the `backgammon-engine` console script declared in
``pyproject.toml``: print the opening position, or play a hot-seat game in
the terminal.
"""

from __future__ import annotations

import argparse
import sys

import numpy as np
from loguru import logger

from backgammon_engine import __version__
from backgammon_engine.console import ConsoleGame
from backgammon_engine.core.board import board_to_string, initial_board
from backgammon_engine.core.game import Game
from backgammon_engine.core.types import RuleConfig


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="backgammon-engine",
        description="Backgammon rules engine CLI",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"backgammon-engine {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every roll and move to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("show", help="Print the opening position")

    play = subparsers.add_parser("play", help="Play a hot-seat game in the terminal")
    play.add_argument("--seed", type=int, default=None, help="Seed for the dice")
    play.add_argument(
        "--stack-limit",
        type=int,
        default=None,
        help="Maximum checkers of one color on a point (default: no limit)",
    )
    play.add_argument(
        "--no-bar-entry",
        action="store_true",
        help="Leave hit checkers on the bar instead of requiring re-entry",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG when verbose."""
    logger.enable("backgammon_engine")
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint used by the `backgammon-engine` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "show":
        print(board_to_string(initial_board()))
        return 0

    if args.command == "play":
        try:
            rules = RuleConfig(max_stack=args.stack_limit, bar_entry=not args.no_bar_entry)
        except ValueError as err:
            parser.error(str(err))
        console = ConsoleGame(Game(rules), rng=np.random.default_rng(args.seed))
        try:
            console.play()
        except (EOFError, KeyboardInterrupt):
            print("\nGame abandoned")
            return 1
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
