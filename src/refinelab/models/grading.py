"""Pydantic models for past grades and grade prediction."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class GradingPattern(BaseModel):
    """A grade received for a past assignment, with what it was marked down for."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    assignment_name: str
    grade: str
    rubric_data: dict | None = None
    penalty_areas: list[str] = []
    created_at: datetime = Field(default_factory=datetime.now)


class GradePrediction(BaseModel):
    predicted_grade_band: str = ""
    confidence: float = 0.0
    key_factors: list[str] = []

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, v):
        if v is None:
            return 0.0
        return min(1.0, max(0.0, float(v)))
