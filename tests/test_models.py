"""Tests for pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from refinelab.models import (
    Essay,
    EssayComparison,
    EssayMetrics,
    LiveMetrics,
    WritingSuggestion,
)


def test_suggestion_is_immutable():
    s = WritingSuggestion(category="clarity", severity="low", message="m", start=1, end=4)
    assert s.has_span
    with pytest.raises(ValidationError):
        s.message = "other"


def test_suggestion_without_span():
    s = WritingSuggestion(category="style", severity="low", message="m")
    assert not s.has_span


def test_suggestion_rejects_unknown_category():
    with pytest.raises(ValidationError):
        WritingSuggestion(category="spelling", severity="low", message="m")


def test_metrics_clamped_to_unit_range():
    m = EssayMetrics(thesis_clarity=2, argument_depth=-1, sentence_variety=None)
    assert (m.thesis_clarity, m.argument_depth, m.sentence_variety) == (1.0, 0.0, 0.0)


def test_comparison_deltas_clamped():
    c = EssayComparison(clarity_delta=5, analysis_delta=-5, structure_delta=0.25)
    assert (c.clarity_delta, c.analysis_delta, c.structure_delta) == (1.0, -1.0, 0.25)


def test_essay_word_count_and_ids():
    a = Essay(title="A", content="one two  three\nfour")
    b = Essay(title="B", content="x")
    assert a.word_count == 4
    assert a.id != b.id


def test_live_metrics_fields():
    fields = set(LiveMetrics.model_fields)
    assert {"word_count", "reading_level", "estimated_read_time", "vocabulary_diversity"} <= fields
