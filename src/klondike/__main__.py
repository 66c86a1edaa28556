# __main__.py - entry point
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from klondike import settings as S
from klondike.board import make_shuffle


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="klondike", description="Keyboard-driven Klondike solitaire.")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--terminal", dest="frontend", action="store_const", const="terminal", help="Play in the terminal (curses).")
    group.add_argument("--window", dest="frontend", action="store_const", const="window", help="Play in a pygame window.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed for a repeatable deal.")
    parser.add_argument("--recycle-limit", type=int, default=None, help="How many times the waste may be turned back over.")
    parser.add_argument("--debug-invariants", action="store_true", help="Check board invariants after every key.")
    parser.add_argument("--log-file", type=str, default="", help="Write a debug log to this path.")
    parser.add_argument("--log-level", type=str, default="INFO", choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    parser.add_argument("--save-settings", action="store_true", help="Remember the chosen front end and recycle limit.")
    return parser.parse_args(argv)


def setup_logging(log_file: str, level: str) -> None:
    root = logging.getLogger("klondike")
    # The terminal front end owns the screen, so only log to a file
    if not log_file:
        root.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)


def resolve_settings(args: argparse.Namespace) -> dict:
    settings = S.load_settings()
    if args.frontend:
        settings["frontend"] = args.frontend
    if args.recycle_limit is not None:
        settings["recycle_limit"] = args.recycle_limit if args.recycle_limit >= 0 else None
    if args.debug_invariants:
        settings["debug_invariants"] = True
    return settings


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.log_level)
    settings = resolve_settings(args)
    if args.save_settings:
        S.save_settings(settings)

    shuffle = make_shuffle(args.seed)
    if settings["frontend"] == "window":
        from klondike.frontends import window as frontend
    else:
        from klondike.frontends import terminal as frontend
    frontend.main(
        shuffle,
        recycle_limit=settings["recycle_limit"],
        debug_invariants=settings["debug_invariants"],
    )


if __name__ == "__main__":
    main()
