"""
Scoreboard renderer - Ranked scores shown after the book ends.
"""

import html

from vnbook.schemas import Score
from vnbook.utils.config import EngineConfig


SCORE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_score_row(score: Score) -> tuple[str, str]:
    """Date and pages-read label for one score."""
    return (
        score.timestamp.strftime(SCORE_DATE_FORMAT),
        f"{score.pages_read} pages read",
    )


def render_scoreboard(scores: list[Score], config: EngineConfig) -> str:
    """
    Render the scoreboard stage.

    Args:
        scores: Scores in display order (ranked)
        config: Engine defaults (colors, sizes, row spacing)

    Returns:
        HTML string with a title and one row per score
    """
    color = config.default_color.to_css()
    background = config.default_background_color.to_css()
    row_style = (
        f"display: flex; justify-content: center; margin: {config.score_row_spacing:g}px 0; "
        f"color: {color}; font-size: {config.default_size:g}px;"
    )

    rows = []
    for score in scores:
        date_label, pages_label = format_score_row(score)
        rows.append(
            f'<div class="vn-score-row" style="{row_style}">'
            f'<span style="width: 400px; text-align: left;">{html.escape(date_label)}</span>'
            f'<span style="width: 200px; text-align: right;">{html.escape(pages_label)}</span>'
            f'</div>'
        )

    title = (
        f'<div class="vn-score-title" style="color: {color}; '
        f'font-size: {config.title_size:g}px; text-align: center;">Score</div>'
    )
    return (
        f'<div class="vn-stage" style="background: {background}; justify-content: center;">'
        f'{title}{"".join(rows)}</div>'
    )
