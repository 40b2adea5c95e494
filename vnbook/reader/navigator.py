"""
Navigator - Page navigation, input resolution, and end-of-book scoring.

Provides:
- Loading a parsed book and resetting the session
- Resolving named input presses to button actions
- Next page / jump to named page / end of book transitions
- Scoreboard mode and restart via the confirm input
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Optional

from vnbook.schemas import (
    Action,
    Book,
    Button,
    JumpToEnd,
    JumpToPage,
    NextPage,
    Page,
    Score,
)
from vnbook.utils.config import EngineConfig

from .bindings import candidate_keys, match_button, resolve_buttons
from .leaderboard import Leaderboard


logger = logging.getLogger(__name__)


class ReaderMode(str, Enum):
    """Session mode. UNINITIALIZED until a book is loaded."""
    UNINITIALIZED = "uninitialized"
    READING = "reading"
    SCOREBOARD = "scoreboard"


class EventKind(str, Enum):
    """What a load or input did to the session."""
    LOADED = "loaded"
    EMPTY_BOOK = "empty_book"         # loaded, but no page to show
    PAGE_CHANGED = "page_changed"
    PAGE_CLEARED = "page_cleared"     # advanced past the last page
    JUMP_IGNORED = "jump_ignored"     # jump target not found
    SCOREBOARD = "scoreboard"
    RESTARTED = "restarted"


@dataclass(frozen=True)
class NavigationEvent:
    """State change reported to the presentation layer."""
    kind: EventKind
    page_index: int
    pages_read: int
    action: Optional[Action] = None
    target: Optional[str] = None      # JumpToPage target name
    score: Optional[Score] = None     # set when the book ended

    @property
    def applied(self) -> bool:
        return self.kind != EventKind.JUMP_IGNORED


@dataclass
class SessionState:
    book: Optional[Book] = None
    current_page_index: int = 0
    pages_read_this_run: int = 0
    mode: ReaderMode = ReaderMode.UNINITIALIZED


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Navigator:
    """
    Drive a reader through a book.

    The navigator is the only writer of session state. A host loop calls
    `handle_input` / `handle_tick` once per input cycle and reads
    `active_page()` or `ranked_scores()` to render.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        leaderboard: Optional[Leaderboard] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize navigator.

        Args:
            config: Engine defaults and input settings
            leaderboard: Score store (default: new one sized from config)
            clock: Returns the current time for score timestamps (default: UTC now)
        """
        self.config = config if config is not None else EngineConfig()
        if leaderboard is None:
            leaderboard = Leaderboard(self.config.scoreboard_capacity)
        self.leaderboard = leaderboard
        self._clock = clock if clock is not None else _utc_now
        self._state = SessionState()

    # -------------------------------------------------------------------------
    # State Access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """Snapshot of the session state."""
        return replace(self._state)

    @property
    def mode(self) -> ReaderMode:
        """Current reader mode."""
        return self._state.mode

    @property
    def book(self) -> Optional[Book]:
        """Loaded book, or None before the first load."""
        return self._state.book

    @property
    def page_index(self) -> int:
        """Index of the current page; may be past the last page."""
        return self._state.current_page_index

    @property
    def pages_read(self) -> int:
        """Pages read in the current run."""
        return self._state.pages_read_this_run

    def active_page(self) -> Optional[Page]:
        """Page being read, or None (no book, out of range, or scoreboard)."""
        state = self._state
        if state.book is None or state.mode != ReaderMode.READING:
            return None
        if 0 <= state.current_page_index < len(state.book.pages):
            return state.book.pages[state.current_page_index]
        return None

    def active_buttons(self) -> list[tuple[str, Button]]:
        """Resolved buttons of the active page, in scan order."""
        page = self.active_page()
        if page is None:
            return []
        return list(resolve_buttons(page, self._state.book).items())

    def ranked_scores(self) -> list[Score]:
        """
        Get recorded scores for display.

        Returns:
            Scores sorted by pages read, highest first
        """
        return self.leaderboard.ranked_view()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self, book: Book) -> NavigationEvent:
        """Replace the session with a fresh run of `book` from page 0."""
        self._state = SessionState(book=book, mode=ReaderMode.READING)
        if not book.pages:
            logger.info("Loaded an empty book, nothing to display")
            return self._event(EventKind.EMPTY_BOOK)

        logger.info(f"Loaded book with {len(book.pages)} pages")
        return self._event(EventKind.LOADED)

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def handle_input(self, input_name: str) -> Optional[NavigationEvent]:
        """Apply a single named input press. Returns None if nothing happened."""
        return self.handle_tick([input_name])

    def handle_tick(self, input_names: Iterable[str]) -> Optional[NavigationEvent]:
        """
        Apply the inputs pressed during one tick.

        At most one action is resolved per tick: the first button of the
        active mapping matching any pressed input wins.
        """
        names = [name.strip() for name in input_names if name and name.strip()]
        if not names:
            return None

        if self._state.mode == ReaderMode.SCOREBOARD:
            return self._handle_scoreboard_input(names)
        if self._state.mode == ReaderMode.READING:
            return self._handle_reading_input(names)
        return None

    def _handle_scoreboard_input(self, names: list[str]) -> Optional[NavigationEvent]:
        confirm = self.config.confirm_input
        for name in names:
            if confirm in candidate_keys(name, self.config.key_bindings):
                return self._restart()
        return None

    def _handle_reading_input(self, names: list[str]) -> Optional[NavigationEvent]:
        page = self.active_page()
        if page is None:
            return None

        match = match_button(
            resolve_buttons(page, self._state.book), names, self.config.key_bindings
        )
        if match is None:
            return None

        key, button = match
        action = button.action
        if page.is_final:
            action = JumpToEnd()

        self._state.pages_read_this_run += 1
        logger.debug(
            f"Button '{key}' on page {self._state.current_page_index} -> {action.kind} "
            f"(pages read: {self._state.pages_read_this_run})"
        )

        if isinstance(action, NextPage):
            return self._move_next(action)
        if isinstance(action, JumpToPage):
            return self._jump_to(action)
        return self._end_book(action)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _move_next(self, action: NextPage) -> NavigationEvent:
        state = self._state
        state.current_page_index += 1
        if state.current_page_index >= len(state.book.pages):
            # Index stays out of range: no active page, input is ignored
            logger.warning(
                f"Advanced past the last page (index {state.current_page_index}); "
                "mark the last page is_final to end the book"
            )
            return self._event(EventKind.PAGE_CLEARED, action=action)
        return self._event(EventKind.PAGE_CHANGED, action=action)

    def _jump_to(self, action: JumpToPage) -> NavigationEvent:
        target_index = self._state.book.page_index(action.target)
        if target_index is None:
            logger.warning(f"Jump target not found: '{action.target}', staying on page")
            return self._event(EventKind.JUMP_IGNORED, action=action, target=action.target)

        self._state.current_page_index = target_index
        return self._event(EventKind.PAGE_CHANGED, action=action, target=action.target)

    def _end_book(self, action: JumpToEnd) -> NavigationEvent:
        score = self.leaderboard.record(self._state.pages_read_this_run, self._clock())
        self._state.mode = ReaderMode.SCOREBOARD
        return self._event(EventKind.SCOREBOARD, action=action, score=score)

    def _restart(self) -> NavigationEvent:
        state = self._state
        state.mode = ReaderMode.READING
        state.current_page_index = 0
        state.pages_read_this_run = 0
        logger.info("Restarting book from the first page")
        return self._event(EventKind.RESTARTED)

    def _event(self, kind: EventKind, **kwargs) -> NavigationEvent:
        return NavigationEvent(
            kind=kind,
            page_index=self._state.current_page_index,
            pages_read=self._state.pages_read_this_run,
            **kwargs,
        )
