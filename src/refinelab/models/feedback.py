"""Pydantic models for AI scoring output."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

RUBRIC_METRICS: tuple[str, ...] = (
    "thesis_clarity",
    "argument_depth",
    "structure_balance",
    "evidence_distribution",
    "analysis_to_summary_ratio",
    "sentence_variety",
    "logical_progression",
)


class ParagraphFeedback(BaseModel):
    paragraph_number: int
    excerpt: str = ""
    tags: list[str] = []
    feedback: str = ""
    issue_types: list[str] = []


class EssayMetrics(BaseModel):
    """Rubric scores between 0 and 1."""

    thesis_clarity: float = 0.0
    argument_depth: float = 0.0
    structure_balance: float = 0.0
    evidence_distribution: float = 0.0
    analysis_to_summary_ratio: float = 0.0
    sentence_variety: float = 0.0
    logical_progression: float = 0.0

    @field_validator("*", mode="before")
    @classmethod
    def _clamp(cls, v):
        if v is None:
            return 0.0
        return min(1.0, max(0.0, float(v)))


class EssayAnalysis(BaseModel):
    paragraph_analysis: list[ParagraphFeedback] = []
    metrics: EssayMetrics = Field(default_factory=EssayMetrics)
    strengths: list[str] = []
    weaknesses: list[str] = []
    strategic_suggestions: list[str] = []


class EssayComparison(BaseModel):
    """Improvement (positive) or regression (negative) between two versions."""

    id: str | None = None
    before_essay_id: str | None = None
    after_essay_id: str | None = None
    clarity_delta: float = 0.0
    coherence_delta: float = 0.0
    structure_delta: float = 0.0
    argument_delta: float = 0.0
    analysis_delta: float = 0.0
    improvements: list[str] = []

    @field_validator(
        "clarity_delta",
        "coherence_delta",
        "structure_delta",
        "argument_delta",
        "analysis_delta",
        mode="before",
    )
    @classmethod
    def _clamp(cls, v):
        if v is None:
            return 0.0
        return min(1.0, max(-1.0, float(v)))


class WritingFingerprint(BaseModel):
    tone_tendencies: list[str] = []
    structural_patterns: list[str] = []
    pacing_issues: list[str] = []
    evidence_habits: list[str] = []
