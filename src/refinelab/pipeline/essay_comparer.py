"""AI comparison of two versions of an essay."""

from __future__ import annotations

import logging

from refinelab.clients.llm_client import LLMClient
from refinelab.models.feedback import EssayComparison
from refinelab.pipeline.prompts import ACADEMIC_INTEGRITY_PROMPT

logger = logging.getLogger(__name__)


class EssayComparer:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def compare(self, before_text: str, after_text: str) -> EssayComparison:
        logger.info("Comparing essay versions (%d -> %d characters)", len(before_text), len(after_text))
        prompt = f"""Compare these two versions of an essay.

BEFORE:
\"\"\"
{before_text}
\"\"\"

AFTER:
\"\"\"
{after_text}
\"\"\"

Return only JSON in this structure:
{{
  "clarity_delta": 0.15,
  "coherence_delta": 0.12,
  "structure_delta": 0.08,
  "argument_delta": 0.18,
  "analysis_delta": 0.22,
  "improvements": ["what changed and why it matters"]
}}

Deltas are between -1 and 1; negative means regression."""

        data = await self.llm.generate_json(prompt=prompt, system=ACADEMIC_INTEGRITY_PROMPT)
        if not isinstance(data, dict):
            raise ValueError("Comparison response is not a JSON object")
        return EssayComparison.model_validate(data)
