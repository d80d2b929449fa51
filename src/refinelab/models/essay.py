"""Pydantic models for stored essays."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from refinelab.models.feedback import EssayAnalysis, EssayMetrics


class Essay(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    content: str
    assignment_name: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    analysis: EssayAnalysis | None = None

    @property
    def word_count(self) -> int:
        return len(self.content.split())


class TrendPoint(BaseModel):
    """One analysed draft on the metric trend line."""

    essay_id: str
    title: str
    created_at: datetime
    metrics: EssayMetrics
