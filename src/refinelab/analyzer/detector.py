"""Run the issue-detection rules against a draft."""

from __future__ import annotations

import logging
from typing import Sequence

from refinelab.analyzer.rules import DEFAULT_RULES, Rule, SuggestionSink
from refinelab.config import AnalyzerConfig
from refinelab.models.analysis import WritingSuggestion

logger = logging.getLogger(__name__)


def detect_issues(
    text: str,
    config: AnalyzerConfig | None = None,
    rules: Sequence[Rule] | None = None,
) -> list[WritingSuggestion]:
    """Return at most ``config.max_suggestions`` suggestions in rule order."""
    config = config or AnalyzerConfig()
    sink = SuggestionSink(config.max_suggestions)
    for rule in rules if rules is not None else DEFAULT_RULES:
        if sink.full:
            logger.debug("Suggestion cap %d reached before %s", sink.limit, rule.__name__)
            break
        rule(text, config, sink)
    return sink.items
