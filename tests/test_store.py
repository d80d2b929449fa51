"""Tests for the SQLite essay store."""

import pytest

from refinelab.models.feedback import EssayAnalysis, EssayComparison, EssayMetrics
from refinelab.store.essay_store import EssayStore


def _analysis(thesis: float = 0.5) -> EssayAnalysis:
    return EssayAnalysis(
        metrics=EssayMetrics(thesis_clarity=thesis, argument_depth=0.4),
        strengths=["Clear topic"],
    )


class TestEssayCrud:
    def test_create_and_get(self, store):
        essay = store.create("My essay", "Some content here.", assignment_name="Unit 1")
        loaded = store.get(essay.id)
        assert loaded is not None
        assert loaded.title == "My essay"
        assert loaded.content == "Some content here."
        assert loaded.assignment_name == "Unit 1"
        assert loaded.analysis is None
        assert loaded.word_count == 3

    @pytest.mark.parametrize("title, content", [("", "text"), ("title", ""), ("   ", "text")])
    def test_create_requires_title_and_content(self, store, title, content):
        with pytest.raises(ValueError):
            store.create(title, content)

    def test_get_missing(self, store):
        assert store.get("nope") is None

    def test_list_newest_first(self, store):
        first = store.create("First", "a")
        second = store.create("Second", "b")
        assert [e.id for e in store.list_essays()] == [second.id, first.id]
        assert len(store.list_essays(limit=1)) == 1

    def test_update(self, store):
        essay = store.create("Title", "Old")
        assert store.update(essay.id, content="New") is True
        loaded = store.get(essay.id)
        assert loaded.content == "New"
        assert loaded.title == "Title"
        assert loaded.updated_at >= essay.updated_at

    def test_update_missing(self, store):
        assert store.update("nope", title="x") is False

    def test_delete(self, store):
        essay = store.create("Title", "Body")
        assert store.delete(essay.id) is True
        assert store.get(essay.id) is None
        assert store.delete(essay.id) is False

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "db" / "essays.db"
        essay = EssayStore(path).create("Title", "Body")
        assert EssayStore(path).get(essay.id).title == "Title"


class TestAnalyses:
    def test_save_analysis(self, store):
        essay = store.create("Title", "Body")
        assert store.save_analysis(essay.id, _analysis(0.7)) is True
        loaded = store.get(essay.id)
        assert loaded.analysis.metrics.thesis_clarity == 0.7
        assert loaded.analysis.strengths == ["Clear topic"]

    def test_save_analysis_missing(self, store):
        assert store.save_analysis("nope", _analysis()) is False

    def test_metric_trend_oldest_first(self, store):
        a = store.create("Draft 1", "Body")
        store.create("Unscored", "Body")
        b = store.create("Draft 2", "Body")
        store.save_analysis(a.id, _analysis(0.3))
        store.save_analysis(b.id, _analysis(0.8))
        trend = store.metric_trend()
        assert [p.essay_id for p in trend] == [a.id, b.id]
        assert [p.metrics.thesis_clarity for p in trend] == [0.3, 0.8]


class TestComparisons:
    def test_save_and_list(self, store):
        a = store.create("Before", "x")
        b = store.create("After", "y")
        saved = store.save_comparison(
            EssayComparison(before_essay_id=a.id, after_essay_id=b.id, clarity_delta=0.2)
        )
        assert saved.id
        assert store.list_comparisons()[0].clarity_delta == 0.2
        assert len(store.list_comparisons(essay_id=a.id)) == 1
        assert store.list_comparisons(essay_id="other") == []

    def test_requires_ids(self, store):
        with pytest.raises(ValueError):
            store.save_comparison(EssayComparison())

    def test_delete_essay_removes_comparisons(self, store):
        a = store.create("Before", "x")
        b = store.create("After", "y")
        store.save_comparison(EssayComparison(before_essay_id=a.id, after_essay_id=b.id))
        store.delete(a.id)
        assert store.list_comparisons() == []

    def test_stats(self, store):
        a = store.create("Before", "x")
        b = store.create("After", "y")
        store.save_analysis(a.id, _analysis())
        store.save_comparison(EssayComparison(before_essay_id=a.id, after_essay_id=b.id))
        store.add_grading_pattern("Unit 1", "B+")
        assert store.stats() == {
            "total": 2,
            "analysed": 1,
            "comparisons": 1,
            "grading_patterns": 1,
        }


class TestGradingPatterns:
    def test_add_and_list(self, store):
        pattern = store.add_grading_pattern(
            " Unit 1 essay ",
            "B+",
            rubric_data={"thesis_clarity": 0.7},
            penalty_areas=["evidence", "citations"],
        )
        [loaded] = store.list_grading_patterns()
        assert loaded == pattern
        assert loaded.assignment_name == "Unit 1 essay"
        assert loaded.rubric_data == {"thesis_clarity": 0.7}
        assert loaded.penalty_areas == ["evidence", "citations"]

    def test_defaults(self, store):
        store.add_grading_pattern("Unit 2", "A")
        [loaded] = store.list_grading_patterns()
        assert loaded.rubric_data is None
        assert loaded.penalty_areas == []

    def test_newest_first(self, store):
        first = store.add_grading_pattern("Unit 1", "B")
        second = store.add_grading_pattern("Unit 2", "A-")
        assert [p.id for p in store.list_grading_patterns()] == [second.id, first.id]
        assert len(store.list_grading_patterns(limit=1)) == 1

    @pytest.mark.parametrize("assignment, grade", [("", "A"), ("Unit 1", " "), ("Unit 1", "")])
    def test_requires_assignment_and_grade(self, store, assignment, grade):
        with pytest.raises(ValueError):
            store.add_grading_pattern(assignment, grade)

    def test_delete(self, store):
        pattern = store.add_grading_pattern("Unit 1", "B")
        assert store.delete_grading_pattern(pattern.id)
        assert not store.delete_grading_pattern(pattern.id)
        assert store.list_grading_patterns() == []
