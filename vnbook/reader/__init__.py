"""
vnbook Reader - Runtime components for loading and reading a book.

This module provides:
- Book loading and content diagnostics
- Navigator: input resolution and page transitions
- Leaderboard: scores of completed playthroughs
- Option resolution helpers
"""

from .loader import (
    ContentParseError,
    BookLoader,
    BookIssue,
    parse_book,
    load_book,
    lint_book,
    format_for_path,
)

from .leaderboard import (
    Leaderboard,
    MAX_SCORES,
)

from .navigator import (
    Navigator,
    NavigationEvent,
    EventKind,
    ReaderMode,
    SessionState,
)

from .bindings import (
    resolve_buttons,
    resolve_color,
    resolve_size,
    resolve_align,
    resolve_background,
    candidate_keys,
    match_button,
)

__all__ = [
    # Loader
    "ContentParseError",
    "BookLoader",
    "BookIssue",
    "parse_book",
    "load_book",
    "lint_book",
    "format_for_path",
    # Leaderboard
    "Leaderboard",
    "MAX_SCORES",
    # Navigator
    "Navigator",
    "NavigationEvent",
    "EventKind",
    "ReaderMode",
    "SessionState",
    # Bindings
    "resolve_buttons",
    "resolve_color",
    "resolve_size",
    "resolve_align",
    "resolve_background",
    "candidate_keys",
    "match_button",
]
