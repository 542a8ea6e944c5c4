from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import Settings
from .dungeon.loader import load_dungeon
from .exceptions import ConfigError, DisconnectedDungeonError, DungeonFormatError
from .game import Game
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def _level(verbosity: int) -> int:
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    return logging.WARNING


def _setup(args: argparse.Namespace) -> Game:
    configure_logging(_level(args.verbose))
    settings = Settings.load(Path(args.config) if getattr(args, "config", None) else None)
    layout = load_dungeon(args.dungeon)
    return Game(layout, settings)


def _cmd_play(args: argparse.Namespace) -> int:
    game = _setup(args)
    print(game)

    def show(g: Game, agent: str) -> None:
        print(f"Move {g.turns} ({agent})")
        print()
        print(g)
        if args.step and agent == "Rogue" and not g.captured:
            input()

    result = game.play(max_turns=args.max_turns, on_move=show)
    if result.captured:
        print("Caught by monster")
    else:
        print(f"Rogue survived {result.turns} turns")
    return 0


def _cmd_analyze(args: argparse.Namespace) -> int:
    game = _setup(args)
    analysis = game.analysis
    print(game)
    for name, count in analysis.summary().items():
        print(f"{name}: {count}")
    for name in ("safe_corridor_starts", "in_loop"):
        sites = sorted(getattr(analysis, name))
        print(f"{name}: {' '.join(str(s) for s in sites) or '-'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rogue-pursuit", description="Monster versus rogue on a grid dungeon")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("dungeon", help="Path to a dungeon text file")
    common.add_argument("--config", help="Optional YAML settings file", default=None)
    common.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    play = sub.add_parser("play", parents=[common], help="Play a game until capture")
    play.add_argument("--max-turns", type=int, default=None, help="Stop after N turns")
    play.add_argument("--step", action="store_true", help="Wait for ENTER after each turn")
    play.set_defaults(func=_cmd_play)

    analyze = sub.add_parser("analyze", parents=[common], help="Print the corridor analysis of a dungeon")
    analyze.set_defaults(func=_cmd_analyze)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except (DungeonFormatError, DisconnectedDungeonError, ConfigError, FileNotFoundError) as e:
        logger.error("%s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
