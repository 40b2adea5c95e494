#!/usr/bin/env python3
"""
play_console.py - Read a book in the terminal.

Each prompt is one tick: type an input name (e.g. "space", "y", "n", "m",
or the key shown next to a button) and press Enter. Several names separated
by spaces count as pressed together. Type "quit" or send EOF to exit.

Usage:
  python scripts/play_console.py
  python scripts/play_console.py data/book.json --config config.example.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from vnbook.reader import ContentParseError, EventKind, Navigator, ReaderMode, load_book
from vnbook.utils import ConfigError, load_config
from vnbook.viewer import format_score_row

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

QUIT_WORDS = {"quit", "exit", "q"}


def show_state(nav: Navigator):
    """Print the active page or the scoreboard."""
    print()
    if nav.mode == ReaderMode.SCOREBOARD:
        print("=== Score ===")
        for score in nav.ranked_scores():
            date_label, pages_label = format_score_row(score)
            print(f"  {date_label}   {pages_label}")
        print(f"\n[{nav.config.confirm_input}] Play again")
        return

    page = nav.active_page()
    if page is None:
        print("(nothing to display)")
        return

    for line in page.lines:
        print(line.text)
    print()
    for key, button in nav.active_buttons():
        print(f"  [{key}] {button.text}")


def play(nav: Navigator):
    """Host loop: one prompt per tick until quit or EOF."""
    show_state(nav)
    while True:
        try:
            raw = input("> ")
        except EOFError:
            print()
            return

        names = raw.strip().lower().split()
        if any(name in QUIT_WORDS for name in names):
            return

        event = nav.handle_tick(names)
        if event is None:
            continue
        if event.kind == EventKind.JUMP_IGNORED:
            print(f"(page '{event.target}' does not exist)")
        show_state(nav)


def main():
    parser = argparse.ArgumentParser(
        description="Read a vnbook content file in the terminal",
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Book content file (default: configured content_path)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Engine config YAML file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show navigation debug logging"
    )

    args = parser.parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
        book = load_book(args.path or config.content_path)
    except (FileNotFoundError, ConfigError, ContentParseError) as e:
        logger.error(str(e))
        sys.exit(1)

    nav = Navigator(config)
    nav.load(book)
    play(nav)


if __name__ == "__main__":
    main()
