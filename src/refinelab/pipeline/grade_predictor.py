"""Grade band prediction from rubric metrics and past grades."""

from __future__ import annotations

import json
import logging

from refinelab.clients.llm_client import LLMClient
from refinelab.models.feedback import EssayMetrics
from refinelab.models.grading import GradePrediction, GradingPattern
from refinelab.pipeline.prompts import ACADEMIC_INTEGRITY_PROMPT

logger = logging.getLogger(__name__)


class GradePredictor:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def predict(
        self, metrics: EssayMetrics, patterns: list[GradingPattern]
    ) -> GradePrediction:
        """Estimate a grade band by comparing the metrics against past grading patterns."""
        if not patterns:
            raise ValueError("At least one past grade is required")

        history = [
            p.model_dump(include={"assignment_name", "grade", "rubric_data", "penalty_areas"})
            for p in patterns
        ]
        logger.info("Predicting grade from %d past grades", len(patterns))
        prompt = f"""Based on the essay metrics and past grading patterns, predict a grade band.

Current essay metrics:
{metrics.model_dump_json(indent=2)}

Past grading patterns:
{json.dumps(history, indent=2)}

Return only JSON in this structure:
{{
  "predicted_grade_band": "B/B+",
  "confidence": 0.75,
  "key_factors": ["which metrics align with which past grades"]
}}

Confidence is between 0 and 1."""

        data = await self.llm.generate_json(prompt=prompt, system=ACADEMIC_INTEGRITY_PROMPT)
        if not isinstance(data, dict):
            raise ValueError("Grade prediction response is not a JSON object")
        return GradePrediction.model_validate(data)
