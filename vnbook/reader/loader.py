"""
Book loader - Parse content files into Book objects.

Provides:
- parse_book: JSON or YAML text -> Book (or ContentParseError)
- load_book: read a content file from disk
- BookLoader: poll a content file and hand out the parsed Book once ready
- lint_book: non-fatal content diagnostics
"""

import json
import logging
from collections import Counter, deque
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from vnbook.schemas import Book, JumpToPage, NextPage

from .bindings import resolve_buttons


logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "yaml")


class ContentParseError(ValueError):
    """Content source could not be decoded into a Book."""

    def __init__(
        self,
        message: str,
        details: Optional[list[tuple[str, str]]] = None,
        source: Optional[str] = None,
    ):
        self.message = message
        self.details = details or []      # (location, message) pairs
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

def format_for_path(path: Path) -> str:
    """Content format from file suffix (.yaml/.yml -> yaml, else json)."""
    return "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"


def parse_book(text: str | bytes, fmt: str = "json", source: Optional[str] = None) -> Book:
    """
    Parse a content document into a Book.

    Args:
        text: Document text (bytes are decoded as UTF-8)
        fmt: "json" or "yaml"
        source: Optional name of the source, used in error messages

    Returns:
        Validated Book

    Raises:
        ContentParseError: If the document is malformed or fails validation
    """
    fmt = fmt.lower()
    if fmt == "yml":
        fmt = "yaml"
    if fmt not in SUPPORTED_FORMATS:
        raise ContentParseError(f"Unsupported content format: {fmt}", source=source)

    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ContentParseError(f"Content is not valid UTF-8: {e}", source=source) from e

    try:
        if fmt == "json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except json.JSONDecodeError as e:
        raise ContentParseError(f"Invalid JSON: {e}", source=source) from e
    except yaml.YAMLError as e:
        raise ContentParseError(f"Invalid YAML: {e}", source=source) from e

    if not isinstance(data, dict):
        raise ContentParseError("Content root must be an object", source=source)

    try:
        return Book.model_validate(data)
    except ValidationError as e:
        details = [
            (".".join(str(part) for part in err["loc"]), err["msg"])
            for err in e.errors()
        ]
        raise ContentParseError(
            f"Invalid book content ({e.error_count()} errors)",
            details=details,
            source=source,
        ) from e


def load_book(path: str | Path) -> Book:
    """
    Load a book from a content file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ContentParseError: If the content is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Book content not found: {path}")

    book = parse_book(path.read_bytes(), fmt=format_for_path(path), source=str(path))
    logger.info(f"Loaded {len(book.pages)} pages from {path}")

    for issue in lint_book(book):
        logger.warning(f"{path}: {issue}")
    return book


class BookLoader:
    """
    Poll a content file and hand out the parsed Book when it is ready.

    `poll()` returns the Book once, the first time the file is readable.
    With `reload=True` it returns a fresh Book whenever the file changes.
    """

    def __init__(self, path: str | Path, reload: bool = False):
        self.path = Path(path)
        self.reload = reload
        self._loaded_mtime: Optional[int] = None

    @property
    def loaded(self) -> bool:
        return self._loaded_mtime is not None

    def poll(self) -> Optional[Book]:
        if not self.path.exists():
            return None

        mtime = self.path.stat().st_mtime_ns
        if self._loaded_mtime is not None:
            if not self.reload or mtime == self._loaded_mtime:
                return None
            logger.info(f"Content changed, reloading {self.path}")

        book = load_book(self.path)
        self._loaded_mtime = mtime
        return book


# -----------------------------------------------------------------------------
# Content Diagnostics
# -----------------------------------------------------------------------------

@dataclass
class BookIssue:
    """Content problem that does not prevent loading."""
    kind: str
    message: str
    page_index: Optional[int] = None

    def __str__(self) -> str:
        where = f"page {self.page_index}" if self.page_index is not None else "book"
        return f"[{self.kind}] {where}: {self.message}"


def lint_book(book: Book) -> list[BookIssue]:
    """
    Check a book for content that loads but reads badly.

    Reports duplicate page names, unresolved jump targets, pages that
    advance past the end, pages without buttons, and unreachable pages.
    """
    issues: list[BookIssue] = []
    pages = book.pages
    if not pages:
        return [BookIssue("empty_book", "book has no pages")]

    for name, count in Counter(book.page_names()).items():
        if count > 1:
            issues.append(BookIssue(
                "duplicate_name",
                f"page name '{name}' used {count} times; jumps go to the first",
                book.page_index(name),
            ))

    names = set(book.page_names())
    for key, button in book.default_buttons.items():
        if isinstance(button.action, JumpToPage) and button.action.target not in names:
            issues.append(BookIssue(
                "unresolved_jump",
                f"default button '{key}' jumps to unknown page '{button.action.target}'",
            ))

    last_index = len(pages) - 1
    for idx, page in enumerate(pages):
        buttons = resolve_buttons(page, book)
        if not buttons:
            issues.append(BookIssue("no_buttons", "page has no buttons and cannot be left", idx))
            continue
        if page.is_final:
            continue
        if page.buttons is not None:
            for key, button in buttons.items():
                action = button.action
                if isinstance(action, JumpToPage) and action.target not in names:
                    issues.append(BookIssue(
                        "unresolved_jump",
                        f"button '{key}' jumps to unknown page '{action.target}'",
                        idx,
                    ))
        if idx == last_index and any(isinstance(b.action, NextPage) for b in buttons.values()):
            issues.append(BookIssue(
                "past_end",
                "last page advances past the end; mark it is_final",
                idx,
            ))

    reachable = _reachable_pages(book)
    for idx in range(len(pages)):
        if idx not in reachable:
            issues.append(BookIssue("unreachable", "page cannot be reached from page 0", idx))

    return issues


def _reachable_pages(book: Book) -> set[int]:
    seen = {0}
    queue = deque([0])
    while queue:
        idx = queue.popleft()
        page = book.pages[idx]
        if page.is_final:
            continue
        for button in resolve_buttons(page, book).values():
            action = button.action
            if isinstance(action, NextPage):
                nxt = idx + 1
            elif isinstance(action, JumpToPage):
                nxt = book.page_index(action.target)
            else:
                continue
            if nxt is not None and nxt < len(book.pages) and nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen
