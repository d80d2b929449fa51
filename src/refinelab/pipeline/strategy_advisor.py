"""Conceptual improvement strategies for identified weaknesses."""

from __future__ import annotations

import logging

from refinelab.clients.llm_client import LLMClient
from refinelab.pipeline.prompts import ACADEMIC_INTEGRITY_PROMPT

logger = logging.getLogger(__name__)


class StrategyAdvisor:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def suggest(self, weaknesses: list[str]) -> list[str]:
        """Return 5-7 conceptual suggestions; no wording to paste into the essay."""
        if not weaknesses:
            return []

        numbered = "\n".join(f"{i}. {w}" for i, w in enumerate(weaknesses, start=1))
        logger.info("Suggesting strategies for %d weaknesses", len(weaknesses))
        prompt = f"""Based on the identified weaknesses, provide 5-7 strategic, conceptual
suggestions for improvement. Do not provide specific wording or sentences to use.

Weaknesses identified:
{numbered}

Return only a JSON array of strings:
["Strategic suggestion 1", "Strategic suggestion 2"]

Focus on conceptual guidance like "strengthen analysis by...", "clarify your argument by...",
"improve structure by..."."""

        data = await self.llm.generate_json(prompt=prompt, system=ACADEMIC_INTEGRITY_PROMPT)
        if not isinstance(data, list):
            raise ValueError("Strategy response is not a JSON array")
        return [str(item) for item in data if str(item).strip()]
