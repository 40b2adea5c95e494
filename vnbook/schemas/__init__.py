"""
vnbook Schemas - Pydantic models for visual novel content and scores.

This module exports all schema classes for:
- Book: colors, lines, buttons, actions, pages, book
- Score: completed playthrough record
"""

# Book schemas
from .book import (
    Color,
    TextAlign,
    Line,
    NextPage,
    JumpToPage,
    JumpToEnd,
    Action,
    ACTION_NAMES,
    Button,
    Page,
    Book,
    normalize_action,
    parse_hex_color,
)

# Score schemas
from .score import Score

__all__ = [
    # Book
    'Color',
    'TextAlign',
    'Line',
    'NextPage',
    'JumpToPage',
    'JumpToEnd',
    'Action',
    'ACTION_NAMES',
    'Button',
    'Page',
    'Book',
    'normalize_action',
    'parse_hex_color',
    # Score
    'Score',
]
