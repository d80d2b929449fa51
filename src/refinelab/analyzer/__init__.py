"""Live writing analyzer: segmentation, metrics, issue detection."""

from refinelab.analyzer.detector import detect_issues
from refinelab.analyzer.metrics import classify_reading_level, compute_metrics
from refinelab.analyzer.rules import DEFAULT_RULES, SuggestionSink
from refinelab.analyzer.scheduler import DebouncedAnalyzer
from refinelab.analyzer.segmenter import split_paragraphs, split_sentences, split_words

__all__ = [
    "DEFAULT_RULES",
    "DebouncedAnalyzer",
    "SuggestionSink",
    "classify_reading_level",
    "compute_metrics",
    "detect_issues",
    "split_paragraphs",
    "split_sentences",
    "split_words",
]
