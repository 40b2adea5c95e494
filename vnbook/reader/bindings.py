"""
Option resolution for pages and lines.

Each fallback chain is a plain function so it can be checked on its own:
- Page buttons fall back to the book's default buttons
- Line color and size fall back to engine defaults
- Line alignment falls back to the page alignment, then centered
- Input names resolve to content button keys through key bindings
"""

from typing import Iterable, Mapping, Optional

from vnbook.schemas import Book, Button, Color, Line, Page, TextAlign
from vnbook.utils.config import EngineConfig


def resolve_buttons(page: Page, book: Book) -> dict[str, Button]:
    """Page-specific buttons if the page declares any mapping, else book defaults."""
    if page.buttons is not None:
        return page.buttons
    return book.default_buttons


def resolve_color(line: Line, defaults: EngineConfig) -> Color:
    """Line color, else the engine default color."""
    return line.color if line.color is not None else defaults.default_color


def resolve_size(line: Line, defaults: EngineConfig) -> float:
    """Line font size, else the engine default size."""
    return line.size if line.size is not None else defaults.default_size


def resolve_align(line: Line, page: Optional[Page] = None) -> TextAlign:
    """Line alignment, else the page alignment, else centered."""
    if line.align is not None:
        return line.align
    if page is not None and page.content_alignment is not None:
        return page.content_alignment
    return TextAlign.CENTER


def resolve_background(page: Optional[Page], defaults: EngineConfig) -> Color:
    """Page background, else the engine default background."""
    if page is not None and page.background_color is not None:
        return page.background_color
    return defaults.default_background_color


def candidate_keys(input_name: str, bindings: Optional[Mapping[str, str]] = None) -> set[str]:
    """
    Button keys a pressed input can trigger.

    The input name itself always counts; a key binding adds the logical
    button it is bound to (e.g. "space" -> {"space", "green"}).
    """
    name = input_name.strip().lower()
    if not name:
        return set()
    keys = {name}
    if bindings:
        bound = bindings.get(name)
        if bound:
            keys.add(bound.lower())
    return keys


def match_button(
    buttons: Mapping[str, Button],
    input_names: Iterable[str],
    bindings: Optional[Mapping[str, str]] = None,
) -> Optional[tuple[str, Button]]:
    """
    Find the button triggered by the pressed inputs.

    Scans `buttons` in mapping order and returns the first entry whose key
    matches any pressed input, or None.
    """
    pressed: set[str] = set()
    for name in input_names:
        pressed |= candidate_keys(name, bindings)

    for key, button in buttons.items():
        if key.lower() in pressed:
            return key, button
    return None
