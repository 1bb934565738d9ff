from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import DEFAULT_CONFIG, GameConfig
from .exceptions import LardumError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lardum",
        description="Lardum - a turn-based dungeon crawler of everyday needs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Play in an Arcade window (default)")
    mode.add_argument("--headless", action="store_true", help="Play in the terminal, one key name per line")
    parser.add_argument("--config", type=Path, default=None, help="YAML file overriding the default settings")
    parser.add_argument("--save-dir", type=Path, default=None, help="Directory holding the save file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic dungeon generation")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def _run_front_end(game, headless: bool) -> int:
    if headless:
        from .app.console import run_console

        return run_console(game)

    from .app import arcade_app

    if arcade_app.arcade is None:
        logger.warning("Arcade not available; falling back to headless mode")
        from .app.console import run_console

        return run_console(game)
    return arcade_app.run_arcade(game)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    config = DEFAULT_CONFIG
    if args.config is not None:
        try:
            config = GameConfig.from_yaml(args.config)
        except (OSError, ValueError) as e:
            logger.error("Invalid config %s: %s", args.config, e)
            return 2

    from .app.game import Game

    try:
        game = Game.build(config, save_dir=args.save_dir, seed=args.seed)
        return _run_front_end(game, args.headless)
    except LardumError:
        logger.exception("Fatal game error")
        return 1
    except KeyboardInterrupt:
        print("Interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
