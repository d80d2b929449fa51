"""Debounced recompute of live metrics and writing suggestions."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from refinelab.analyzer.detector import detect_issues
from refinelab.analyzer.metrics import compute_metrics
from refinelab.config import AnalyzerConfig
from refinelab.models.analysis import LiveMetrics, WritingSuggestion

logger = logging.getLogger(__name__)


class DebouncedAnalyzer:
    """Recomputes metrics on every edit and suggestions after a quiet period.

    At most one detection pass is pending at a time. Each submit bumps a
    generation counter and cancels the pending pass; a pass only publishes
    its result if its generation is still the latest.
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        *,
        on_metrics: Callable[[LiveMetrics], None] | None = None,
        on_suggestions: Callable[[list[WritingSuggestion]], None] | None = None,
    ):
        self.config = config or AnalyzerConfig()
        self.on_metrics = on_metrics
        self.on_suggestions = on_suggestions
        self.metrics: LiveMetrics = compute_metrics("", self.config)
        self.suggestions: list[WritingSuggestion] = []
        self.analyzed_text: str | None = None
        self.passes = 0
        self._generation = 0
        self._pending: asyncio.Task | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(self, text: str) -> LiveMetrics:
        """Register an edit. Must be called from within a running event loop."""
        loop = asyncio.get_running_loop()
        self.metrics = compute_metrics(text, self.config)
        if self.on_metrics:
            self.on_metrics(self.metrics)

        self._generation += 1
        self.cancel()
        self._pending = loop.create_task(self._run(text, self._generation))
        return self.metrics

    def cancel(self) -> None:
        """Drop the pending detection pass, if any."""
        if self.pending:
            self._pending.cancel()
            logger.debug("Cancelled superseded analysis pass")
        self._pending = None

    async def wait_idle(self) -> None:
        """Wait until no detection pass is pending.

        Cancelling the waiter leaves the pending pass running.
        """
        while self.pending:
            task = self._pending
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                # superseded by submit() or cancel()
                if task.cancelled():
                    continue
                raise

    async def _run(self, text: str, generation: int) -> None:
        await asyncio.sleep(self.config.debounce_seconds)
        if generation != self._generation:
            return
        suggestions = detect_issues(text, self.config)
        if generation != self._generation:
            return
        self.suggestions = suggestions
        self.analyzed_text = text
        self.passes += 1
        logger.debug("Analysis pass %d: %d suggestions", self.passes, len(suggestions))
        if self.on_suggestions:
            self.on_suggestions(suggestions)
