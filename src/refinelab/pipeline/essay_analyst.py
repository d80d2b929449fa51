"""Rubric-style AI analysis of a single essay."""

from __future__ import annotations

import logging

from refinelab.clients.llm_client import LLMClient
from refinelab.models.feedback import EssayAnalysis
from refinelab.pipeline.prompts import ACADEMIC_INTEGRITY_PROMPT

logger = logging.getLogger(__name__)

ANALYSIS_SCHEMA = """\
{
  "paragraph_analysis": [
    {
      "paragraph_number": 1,
      "excerpt": "first 100 characters of the paragraph",
      "tags": ["weak transition", "summary-heavy"],
      "feedback": "descriptive feedback explaining the issue",
      "issue_types": ["structure", "analysis", "evidence"]
    }
  ],
  "metrics": {
    "thesis_clarity": 0.7,
    "argument_depth": 0.6,
    "structure_balance": 0.8,
    "evidence_distribution": 0.65,
    "analysis_to_summary_ratio": 0.55,
    "sentence_variety": 0.75,
    "logical_progression": 0.7
  },
  "strengths": ["..."],
  "weaknesses": ["..."],
  "strategic_suggestions": ["..."]
}"""


class EssayAnalyst:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def analyze(self, essay_text: str) -> EssayAnalysis:
        """Score an essay on the seven rubric metrics (0-1) with paragraph feedback."""
        if not essay_text or not essay_text.strip():
            raise ValueError("Essay text is empty")

        logger.info("Analyzing essay (%d characters)", len(essay_text))
        prompt = f"""Analyze the following essay.

Essay:
\"\"\"
{essay_text}
\"\"\"

Return only JSON in this structure:
{ANALYSIS_SCHEMA}

Provide analytical feedback only, never replacement text. All metrics are between 0 and 1."""

        data = await self.llm.generate_json(prompt=prompt, system=ACADEMIC_INTEGRITY_PROMPT)
        if not isinstance(data, dict):
            raise ValueError("Essay analysis response is not a JSON object")

        # Older replies nest strengths/weaknesses under one key
        nested = data.pop("strengths_weaknesses", None)
        if isinstance(nested, dict):
            data.setdefault("strengths", nested.get("strengths", []))
            data.setdefault("weaknesses", nested.get("weaknesses", []))

        return EssayAnalysis.model_validate(data)
