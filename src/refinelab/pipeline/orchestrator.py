"""Coordinates the feedback agents with the essay store."""

from __future__ import annotations

import asyncio
import logging

from refinelab.clients.llm_client import LLMClient
from refinelab.models.essay import Essay
from refinelab.models.feedback import EssayAnalysis, EssayComparison, WritingFingerprint
from refinelab.models.grading import GradePrediction
from refinelab.pipeline.essay_analyst import EssayAnalyst
from refinelab.pipeline.essay_comparer import EssayComparer
from refinelab.pipeline.fingerprint import FingerprintExtractor
from refinelab.pipeline.grade_predictor import GradePredictor
from refinelab.pipeline.strategy_advisor import StrategyAdvisor
from refinelab.store.essay_store import EssayStore

logger = logging.getLogger(__name__)


class EssayNotFoundError(LookupError):
    """Raised when a requested essay id is not in the store."""


class FeedbackPipeline:
    """Runs AI feedback for stored essays and persists the results."""

    def __init__(self, llm: LLMClient, store: EssayStore):
        self.store = store
        self.analyst = EssayAnalyst(llm)
        self.comparer = EssayComparer(llm)
        self.fingerprinter = FingerprintExtractor(llm)
        self.grader = GradePredictor(llm)
        self.advisor = StrategyAdvisor(llm)

    def _require(self, essay_id: str) -> Essay:
        essay = self.store.get(essay_id)
        if essay is None:
            raise EssayNotFoundError(f"Essay not found: {essay_id}")
        return essay

    def _require_analysis(self, essay_id: str) -> tuple[Essay, EssayAnalysis]:
        essay = self._require(essay_id)
        if essay.analysis is None:
            raise ValueError(f"Essay {essay_id} has no AI analysis yet")
        return essay, essay.analysis

    async def submit(
        self, title: str, content: str, assignment_name: str | None = None
    ) -> tuple[Essay, EssayAnalysis]:
        """Analyse a new essay and store it together with its analysis."""
        analysis = await self.analyst.analyze(content)
        essay = self.store.create(title, content, assignment_name=assignment_name)
        self.store.save_analysis(essay.id, analysis)
        return essay.model_copy(update={"analysis": analysis}), analysis

    async def analyze(self, essay_id: str) -> EssayAnalysis:
        """(Re)analyse a stored essay."""
        essay = self._require(essay_id)
        analysis = await self.analyst.analyze(essay.content)
        self.store.save_analysis(essay.id, analysis)
        logger.info("Stored analysis for essay %s", essay.id)
        return analysis

    async def compare(self, before_id: str, after_id: str) -> EssayComparison:
        before = self._require(before_id)
        after = self._require(after_id)
        comparison = await self.comparer.compare(before.content, after.content)
        return self.store.save_comparison(
            comparison.model_copy(
                update={"before_essay_id": before.id, "after_essay_id": after.id}
            )
        )

    async def fingerprint(self, limit: int = 5) -> WritingFingerprint:
        """Fingerprint the most recent essays."""
        essays = self.store.list_essays(limit=limit)
        return await self.fingerprinter.extract([e.content for e in essays])

    async def predict_grade(self, essay_id: str) -> GradePrediction:
        """Predict a grade band for an analysed essay from the recorded past grades."""
        _, analysis = self._require_analysis(essay_id)
        patterns = self.store.list_grading_patterns()
        return await self.grader.predict(analysis.metrics, patterns)

    async def suggest_strategies(self, essay_id: str) -> list[str]:
        """Refresh the strategic suggestions of an analysed essay from its weaknesses."""
        essay, analysis = self._require_analysis(essay_id)
        suggestions = await self.advisor.suggest(analysis.weaknesses)
        self.store.save_analysis(
            essay.id, analysis.model_copy(update={"strategic_suggestions": suggestions})
        )
        return suggestions

    async def analyze_many(self, essay_ids: list[str]) -> list[EssayAnalysis]:
        return list(await asyncio.gather(*(self.analyze(i) for i in essay_ids)))
