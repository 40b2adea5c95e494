"""
Page renderer - Generate HTML for the page being read.

Features:
- Full-stage background using the page or default background color
- Lines with per-line color, size, and alignment (engine defaults otherwise)
- Button legend with colored swatches for the logical buttons
- Empty stage when there is no active page
"""

import html
from typing import Optional

from vnbook.reader.bindings import (
    resolve_align,
    resolve_background,
    resolve_color,
    resolve_size,
)
from vnbook.schemas import Book, Button, Line, Page, TextAlign
from vnbook.utils.config import EngineConfig


# Content alignment to CSS
TEXT_ALIGN_CSS = {
    TextAlign.START: "left",
    TextAlign.CENTER: "center",
    TextAlign.END: "right",
}

JUSTIFY_CSS = {
    TextAlign.START: "flex-start",
    TextAlign.CENTER: "center",
    TextAlign.END: "flex-end",
}

# Logical button key to swatch color
BUTTON_SWATCHES = {
    "green": "#43A047",
    "yellow": "#FDD835",
    "red": "#E53935",
}


def get_page_css() -> str:
    """Get CSS styles for page display."""
    return """
    <style>
    .vn-stage {
        min-height: 70vh;
        border-radius: 12px;
        padding: 2em 1.5em;
        display: flex;
        flex-direction: column;
        font-family: "Mochiy Pop One", "Noto Sans JP", sans-serif;
    }
    .vn-line {
        white-space: pre-wrap;
        line-height: 1.3;
    }
    .vn-buttons {
        margin-top: 1.5em;
        display: flex;
        flex-direction: column;
        gap: 0.6em;
        align-items: center;
    }
    .vn-button {
        display: flex;
        align-items: center;
        gap: 0.6em;
        width: 300px;
    }
    .vn-swatch {
        width: 22px;
        height: 22px;
        border-radius: 50%;
        border: 2px solid rgba(255, 255, 255, 0.4);
        flex-shrink: 0;
    }
    .vn-key {
        font-family: monospace;
        opacity: 0.7;
    }
    </style>
    """


def render_line(line: Line, page: Optional[Page], config: EngineConfig, spacing: float) -> str:
    """Render a single line with its resolved color, size and alignment."""
    color = resolve_color(line, config)
    size = resolve_size(line, config)
    align = TEXT_ALIGN_CSS[resolve_align(line, page)]
    style = (
        f"color: {color.to_css()}; font-size: {size:g}px; "
        f"text-align: {align}; margin: {spacing:g}px 0;"
    )
    return f'<div class="vn-line" style="{style}">{html.escape(line.text)}</div>'


def render_button_legend(buttons: list[tuple[str, Button]], config: EngineConfig) -> str:
    """
    Render the buttons of a page as a legend.

    Keys with a known swatch ("green", "yellow", "red") get a colored dot,
    other keys are shown as the input name.
    """
    if not buttons:
        return ""

    items = []
    text_color = config.default_color.to_css()
    for key, button in buttons:
        swatch = BUTTON_SWATCHES.get(key.lower())
        if swatch:
            marker = f'<span class="vn-swatch" style="background: {swatch};"></span>'
        else:
            marker = f'<span class="vn-key">[{html.escape(key)}]</span>'
        items.append(
            f'<div class="vn-button" style="color: {text_color}; font-size: {config.default_size:g}px;">'
            f'{marker}<span>{html.escape(button.text)}</span></div>'
        )
    return f'<div class="vn-buttons">{"".join(items)}</div>'


def render_page(
    page: Optional[Page],
    book: Optional[Book],
    buttons: list[tuple[str, Button]],
    config: EngineConfig,
) -> str:
    """
    Render a full page stage.

    Args:
        page: Active page, or None for an empty stage
        book: Book the page belongs to (line spacing)
        buttons: Resolved buttons in display order
        config: Engine defaults

    Returns:
        HTML string
    """
    background = resolve_background(page, config).to_css()
    if page is None:
        return f'<div class="vn-stage" style="background: {background};"></div>'

    justify = "center"
    if page.content_alignment is not None:
        justify = JUSTIFY_CSS[page.content_alignment]
    spacing = book.line_spacing if book is not None else 30.0

    parts = [render_line(line, page, config, spacing) for line in page.lines]
    parts.append(render_button_legend(buttons, config))

    return (
        f'<div class="vn-stage" style="background: {background}; justify-content: {justify};">'
        f'{"".join(parts)}</div>'
    )
