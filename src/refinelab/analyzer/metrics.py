"""Live metrics computed from the draft on every edit."""

from __future__ import annotations

import math

from refinelab.analyzer.segmenter import split_paragraphs, split_sentences, split_words
from refinelab.config import AnalyzerConfig
from refinelab.models.analysis import LiveMetrics

# (exclusive upper bound on avg words per sentence, label)
READING_LEVELS: tuple[tuple[float, str], ...] = (
    (12, "Middle School"),
    (18, "High School"),
    (25, "College"),
)
TOP_READING_LEVEL = "Graduate"

_PUNCTUATION = "\"'“”‘’()[]{}.,;:!?-–—"


def classify_reading_level(avg_words_per_sentence: float) -> str:
    """Map average sentence length to a reading band; boundaries belong to the upper band."""
    for bound, label in READING_LEVELS:
        if avg_words_per_sentence < bound:
            return label
    return TOP_READING_LEVEL


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


def _percent(numerator: int, denominator: int) -> int:
    # half-up, not banker's rounding
    return math.floor(numerator / denominator * 100 + 0.5) if denominator else 0


def compute_metrics(text: str, config: AnalyzerConfig | None = None) -> LiveMetrics:
    """Compute a fresh LiveMetrics snapshot for ``text``."""
    config = config or AnalyzerConfig()

    words = split_words(text)
    sentences = split_sentences(text)
    paragraphs = split_paragraphs(text)
    word_count = len(words)

    folded = [w.lower() for w in words]
    unique_words = len(set(folded))

    transitions = frozenset(config.transition_words)
    transition_count = sum(1 for w in folded if w.strip(_PUNCTUATION) in transitions)
    long_words = sum(1 for w in words if len(w) > config.academic_word_length)

    avg_words = _ratio(word_count, len(sentences))

    return LiveMetrics(
        word_count=word_count,
        character_count=len(text),
        paragraph_count=len(paragraphs),
        sentence_count=len(sentences),
        avg_words_per_sentence=avg_words,
        avg_sentences_per_paragraph=_ratio(len(sentences), len(paragraphs)),
        unique_words=unique_words,
        vocabulary_diversity=_percent(unique_words, word_count),
        transition_words=transition_count,
        academic_tone=_percent(long_words, word_count),
        reading_level=classify_reading_level(avg_words),
        estimated_read_time=math.ceil(word_count / config.words_per_minute),
    )
