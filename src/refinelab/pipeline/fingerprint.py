"""Recurring style habits across a writer's essays."""

from __future__ import annotations

import logging

from refinelab.clients.llm_client import LLMClient
from refinelab.models.feedback import WritingFingerprint
from refinelab.pipeline.prompts import ACADEMIC_INTEGRITY_PROMPT

logger = logging.getLogger(__name__)

MAX_CHARS_PER_ESSAY = 2000


class FingerprintExtractor:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def extract(self, essays: list[str]) -> WritingFingerprint:
        if not essays:
            raise ValueError("At least one essay is required")

        excerpts = "\n\n---\n\n".join(
            f"Essay {i}:\n{text[:MAX_CHARS_PER_ESSAY]}" for i, text in enumerate(essays, start=1)
        )
        logger.info("Extracting writing fingerprint from %d essays", len(essays))
        prompt = f"""Identify recurring patterns in this writer's style.

{excerpts}

Return only JSON in this structure:
{{
  "tone_tendencies": ["..."],
  "structural_patterns": ["..."],
  "pacing_issues": ["..."],
  "evidence_habits": ["..."]
}}"""

        data = await self.llm.generate_json(prompt=prompt, system=ACADEMIC_INTEGRITY_PROMPT)
        if not isinstance(data, dict):
            raise ValueError("Fingerprint response is not a JSON object")
        return WritingFingerprint.model_validate(data)
