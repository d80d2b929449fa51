"""Pydantic models for the live writing analyzer."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["style", "grammar", "clarity", "structure"]
Severity = Literal["high", "medium", "low"]


class Draft(BaseModel):
    """The essay text currently being edited."""

    title: str = ""
    content: str = ""


class LiveMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    word_count: int = 0
    character_count: int = 0
    paragraph_count: int = 0
    sentence_count: int = 0
    avg_words_per_sentence: float = 0.0
    avg_sentences_per_paragraph: float = 0.0
    unique_words: int = 0
    vocabulary_diversity: int = 0  # percentage 0-100
    transition_words: int = 0
    academic_tone: int = 0  # percentage of words longer than the academic threshold
    reading_level: str = "Middle School"
    estimated_read_time: int = 0  # minutes


class WritingSuggestion(BaseModel):
    """One detected issue with a [start, end) span into the draft text.

    ``suggestion`` is guidance shown to the writer; it is never applied to the text.
    """

    model_config = ConfigDict(frozen=True)

    category: Category
    severity: Severity
    message: str
    start: int = 0
    end: int = 0
    suggestion: str | None = None

    @property
    def has_span(self) -> bool:
        return self.end > self.start


class RevisionMarker(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=datetime.now)
    word_count: int
