"""
vnbook Viewer - Rendering components for the reader.

This module provides:
- Page rendering with resolved line styles and button legend
- Scoreboard rendering
"""

from .page import (
    get_page_css,
    render_line,
    render_button_legend,
    render_page,
    TEXT_ALIGN_CSS,
    BUTTON_SWATCHES,
)

from .scoreboard import (
    format_score_row,
    render_scoreboard,
    SCORE_DATE_FORMAT,
)

__all__ = [
    # Page
    "get_page_css",
    "render_line",
    "render_button_legend",
    "render_page",
    "TEXT_ALIGN_CSS",
    "BUTTON_SWATCHES",
    # Scoreboard
    "format_score_row",
    "render_scoreboard",
    "SCORE_DATE_FORMAT",
]
