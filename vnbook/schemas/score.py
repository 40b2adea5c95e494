"""
Score schema for vnbook.

A Score is created once per completed playthrough and never changes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Score(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    pages_read: int = Field(..., ge=0)
