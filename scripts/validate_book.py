#!/usr/bin/env python3
"""
validate_book.py - Check a book content file before shipping it.

Parses the content file (JSON or YAML) and reports content issues:
duplicate page names, unresolved jump targets, pages that advance past
the end of the book, pages without buttons, and unreachable pages.

Usage:
  python scripts/validate_book.py data/book.json
  python scripts/validate_book.py data/book.yaml --strict
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from vnbook.reader import ContentParseError, lint_book, load_book

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def validate(path: Path, strict: bool = False) -> int:
    """
    Validate a content file.

    Returns:
        Process exit code (0 ok, 1 parse failure or issues in strict mode)
    """
    try:
        book = load_book(path)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except ContentParseError as e:
        logger.error(f"Parse failed: {e}")
        for location, message in e.details:
            logger.error(f"  - {location}: {message}")
        return 1

    issues = lint_book(book)
    logger.info(f"Pages: {len(book.pages)} ({len(book.page_names())} named)")
    logger.info(f"Default buttons: {', '.join(book.default_buttons) or 'none'}")

    if not issues:
        logger.info("No content issues found")
        return 0

    logger.warning(f"Found {len(issues)} content issues")
    return 1 if strict else 0


def main():
    parser = argparse.ArgumentParser(
        description="Validate a vnbook content file",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Book content file (.json, .yaml or .yml)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when content issues are found"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(validate(args.path, strict=args.strict))


if __name__ == "__main__":
    main()
