"""
Leaderboard - In-memory scores of completed playthroughs.

Keeps at most `capacity` scores; the oldest one is dropped before a new
score is added once the store is full. Scores live as long as the process.
"""

import logging
from datetime import datetime
from typing import Optional

from vnbook.schemas import Score


logger = logging.getLogger(__name__)

MAX_SCORES = 10


class Leaderboard:
    """Accumulates scores and produces the ranked view shown after a run."""

    def __init__(self, capacity: int = MAX_SCORES):
        """
        Initialize an empty leaderboard.

        Args:
            capacity: Maximum number of scores retained (>= 1)
        """
        if capacity < 1:
            raise ValueError(f"Leaderboard capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._scores: list[Score] = []

    def __len__(self) -> int:
        return len(self._scores)

    @property
    def scores(self) -> list[Score]:
        """Scores in insertion order (oldest first)."""
        return list(self._scores)

    def record(self, pages_read: int, now: datetime) -> Score:
        """
        Record a completed playthrough.

        Evicts the oldest score first when the store is already full.

        Returns:
            The new Score
        """
        if len(self._scores) >= self.capacity:
            evicted = self._scores.pop(0)
            logger.debug(
                f"Leaderboard full, evicted score from {evicted.timestamp.isoformat()}"
            )

        score = Score(timestamp=now, pages_read=pages_read)
        self._scores.append(score)
        logger.info(f"Recorded score: {pages_read} pages read ({len(self._scores)}/{self.capacity})")
        return score

    def ranked_view(self) -> list[Score]:
        """Scores by pages read, highest first; ties keep recording order."""
        return sorted(self._scores, key=lambda s: s.pages_read, reverse=True)

    def best(self) -> Optional[Score]:
        ranked = self.ranked_view()
        return ranked[0] if ranked else None
