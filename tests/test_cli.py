"""Tests for the typer CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from refinelab import cli
from refinelab.config import AppConfig, StoreConfig
from refinelab.models.feedback import EssayAnalysis

runner = CliRunner()


@pytest.fixture
def app_config(tmp_path, monkeypatch) -> AppConfig:
    config = AppConfig(store=StoreConfig(db_path=str(tmp_path / "essays.db")))
    monkeypatch.setattr(cli, "load_config", lambda: config)
    return config


@pytest.fixture
def essay_file(tmp_path, sample_essay_text):
    path = tmp_path / "essay.txt"
    path.write_text(sample_essay_text, encoding="utf-8")
    return path


class TestAnalyze:
    def test_prints_metrics_and_suggestions(self, app_config, essay_file):
        result = runner.invoke(cli.app, ["analyze", str(essay_file)])
        assert result.exit_code == 0
        assert "Live metrics" in result.output
        assert "Suggestions" in result.output

    def test_missing_file(self, app_config, tmp_path):
        result = runner.invoke(cli.app, ["analyze", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_unsupported_format(self, app_config, tmp_path):
        path = tmp_path / "essay.pdf"
        path.write_bytes(b"%PDF")
        result = runner.invoke(cli.app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert "Unsupported file format" in result.output


class TestStoreCommands:
    def test_add_without_scoring_then_list_and_delete(self, app_config, essay_file):
        result = runner.invoke(cli.app, ["add", "Social media", "--file", str(essay_file), "--no-score"])
        assert result.exit_code == 0

        store = cli._store(app_config)
        [essay] = store.list_essays()
        assert essay.title == "Social media"

        result = runner.invoke(cli.app, ["list"])
        assert result.exit_code == 0
        assert "Essays" in result.output

        result = runner.invoke(cli.app, ["delete", essay.id])
        assert result.exit_code == 0
        assert store.list_essays() == []

    def test_show_unknown_essay(self, app_config):
        result = runner.invoke(cli.app, ["show", "missing"])
        assert result.exit_code == 1
        assert "Essay not found" in result.output

    def test_trends_empty(self, app_config):
        result = runner.invoke(cli.app, ["trends"])
        assert result.exit_code == 0
        assert "No analysed essays yet" in result.output


class TestLessonCommands:
    def test_list(self, app_config):
        result = runner.invoke(cli.app, ["lessons", "list"])
        assert result.exit_code == 0
        assert "Writing lessons" in result.output
        assert "thesis-clarity" in result.output

    def test_list_by_category(self, app_config):
        result = runner.invoke(cli.app, ["lessons", "list", "--category", "Style"])
        assert result.exit_code == 0
        assert "sentence-variety" in result.output
        assert "thesis-clarity" not in result.output

    def test_show(self, app_config):
        result = runner.invoke(cli.app, ["lessons", "show", "evidence-use"])
        assert result.exit_code == 0
        assert "Using Evidence Effectively" in result.output
        assert "Checklist" in result.output

    def test_show_unknown(self, app_config):
        result = runner.invoke(cli.app, ["lessons", "show", "missing"])
        assert result.exit_code == 1
        assert "Lesson not found" in result.output


class TestGradeCommands:
    def test_add_and_list(self, app_config):
        result = runner.invoke(
            cli.app, ["grades", "add", "Unit 1", "B+", "-p", "evidence", "-p", "citations"]
        )
        assert result.exit_code == 0
        [pattern] = cli._store(app_config).list_grading_patterns()
        assert pattern.grade == "B+"
        assert pattern.penalty_areas == ["evidence", "citations"]
        assert pattern.rubric_data is None

        result = runner.invoke(cli.app, ["grades", "list"])
        assert result.exit_code == 0
        assert "Recorded grades" in result.output

    def test_add_with_essay_metrics(self, app_config, sample_analysis_payload):
        store = cli._store(app_config)
        essay = store.create("Title", "Body text.")
        store.save_analysis(essay.id, EssayAnalysis.model_validate(sample_analysis_payload))

        result = runner.invoke(cli.app, ["grades", "add", "Unit 1", "A-", "--essay", essay.id])

        assert result.exit_code == 0
        [pattern] = store.list_grading_patterns()
        assert pattern.rubric_data["thesis_clarity"] == 0.7

    def test_add_with_unanalysed_essay(self, app_config):
        essay = cli._store(app_config).create("Title", "Body text.")
        result = runner.invoke(cli.app, ["grades", "add", "Unit 1", "A-", "--essay", essay.id])
        assert result.exit_code == 1
        assert cli._store(app_config).list_grading_patterns() == []

    def test_predict_without_analysis(self, app_config, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        essay = cli._store(app_config).create("Title", "Body text.")
        result = runner.invoke(cli.app, ["predict", essay.id])
        assert result.exit_code == 1
        assert "no AI analysis yet" in result.output
