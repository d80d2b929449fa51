"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from refinelab.clients.llm_client import LLMClient, LLMResponse
from refinelab.config import AnalyzerConfig, AppConfig, EditorConfig
from refinelab.store.essay_store import EssayStore


@pytest.fixture
def sample_essay_text() -> str:
    return (
        "Social media has changed how teenagers communicate. It was designed to connect people, "
        "but it is often used to compare lives.\n\n"
        "Many students feel very anxious after scrolling. In order to cope, they limit screen time.\n\n"
        "However, schools can teach healthier habits. Ultimately, balance matters more than abstinence."
    )


@pytest.fixture
def sample_analysis_payload() -> dict:
    return {
        "paragraph_analysis": [
            {
                "paragraph_number": 1,
                "excerpt": "Social media has changed how teenagers communicate.",
                "tags": ["clear claim"],
                "feedback": "The opening states a claim but the scope is broad.",
                "issue_types": ["structure"],
            }
        ],
        "metrics": {
            "thesis_clarity": 0.7,
            "argument_depth": 0.5,
            "structure_balance": 0.8,
            "evidence_distribution": 0.4,
            "analysis_to_summary_ratio": 0.6,
            "sentence_variety": 0.75,
            "logical_progression": 0.65,
        },
        "strengths": ["Clear topic"],
        "weaknesses": ["Little evidence"],
        "strategic_suggestions": ["Support each claim with a source"],
    }


@pytest.fixture
def fast_config() -> AppConfig:
    return AppConfig(
        analyzer=AnalyzerConfig(debounce_ms=20),
        editor=EditorConfig(autosave_seconds=0.1),
    )


@pytest.fixture
def store(tmp_path) -> EssayStore:
    return EssayStore(db_path=tmp_path / "essays.db")


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client
