"""Data models for RefineLab."""

from refinelab.models.analysis import (
    Draft,
    LiveMetrics,
    RevisionMarker,
    WritingSuggestion,
)
from refinelab.models.essay import Essay, TrendPoint
from refinelab.models.feedback import (
    EssayAnalysis,
    EssayComparison,
    EssayMetrics,
    ParagraphFeedback,
    WritingFingerprint,
)
from refinelab.models.grading import GradePrediction, GradingPattern
from refinelab.models.lesson import Lesson

__all__ = [
    "Draft",
    "Essay",
    "EssayAnalysis",
    "EssayComparison",
    "EssayMetrics",
    "GradePrediction",
    "GradingPattern",
    "Lesson",
    "LiveMetrics",
    "ParagraphFeedback",
    "RevisionMarker",
    "TrendPoint",
    "WritingFingerprint",
    "WritingSuggestion",
]
