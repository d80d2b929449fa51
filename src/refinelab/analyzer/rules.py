"""Issue detection rules.

Each rule scans the whole draft and appends to a shared capped sink, stopping
as soon as the sink is full. Rules never raise on arbitrary text.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from functools import lru_cache
from typing import Callable

from refinelab.analyzer.segmenter import paragraph_spans, sentence_spans, split_sentences
from refinelab.config import AnalyzerConfig
from refinelab.models.analysis import WritingSuggestion

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w+")


class SuggestionSink:
    """Accumulates suggestions up to a fixed limit."""

    def __init__(self, limit: int):
        self.limit = limit
        self.items: list[WritingSuggestion] = []

    @property
    def full(self) -> bool:
        return len(self.items) >= self.limit

    def add(self, suggestion: WritingSuggestion) -> bool:
        """Append unless full. Returns False once no more room is left."""
        if self.full:
            return False
        self.items.append(suggestion)
        return not self.full

    def __len__(self) -> int:
        return len(self.items)


Rule = Callable[[str, AnalyzerConfig, SuggestionSink], None]


@lru_cache(maxsize=64)
def _alternation(words: tuple[str, ...], suffix: str = "") -> re.Pattern:
    ordered = sorted(words, key=len, reverse=True)
    body = "|".join(re.escape(w) for w in ordered)
    return re.compile(rf"\b(?:{body}){suffix}", re.IGNORECASE)


@lru_cache(maxsize=64)
def _compile_cliche(pattern: str) -> re.Pattern | None:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error:
        logger.warning("Skipping invalid phrase pattern: %r", pattern)
        return None


def passive_voice(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    if not config.passive_auxiliaries:
        return
    pattern = _alternation(config.passive_auxiliaries, r"\s+\w+ed\b")
    for match in pattern.finditer(text):
        if not sink.add(WritingSuggestion(
            category="style",
            severity="low",
            message="Consider using active voice for stronger writing",
            start=match.start(),
            end=match.end(),
        )):
            return


def weak_qualifiers(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    if not config.weak_qualifiers:
        return
    pattern = _alternation(config.weak_qualifiers, r"\s+")
    for match in pattern.finditer(text):
        if not sink.add(WritingSuggestion(
            category="style",
            severity="medium",
            message="Remove qualifier and use a stronger word",
            start=match.start(),
            end=match.end(),
        )):
            return


def word_repetition(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    counts = Counter(
        w for w in _WORD.findall(text.lower()) if len(w) > config.repetition_word_length
    )
    for word, count in counts.items():
        if count <= config.repetition_threshold:
            continue
        if not sink.add(WritingSuggestion(
            category="style",
            severity="low",
            message=f'"{word}" appears {count} times. Consider varying your word choice.',
        )):
            return


def long_sentences(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    for sentence in sentence_spans(text):
        n_words = len(sentence.text.split())
        if n_words <= config.long_sentence_words:
            continue
        if not sink.add(WritingSuggestion(
            category="clarity",
            severity="high",
            message=f"Long sentence ({n_words} words). Consider breaking it up.",
            start=sentence.start,
            end=sentence.end,
        )):
            return


def long_paragraphs(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    for para in paragraph_spans(text):
        n_sentences = len(split_sentences(para.text))
        if n_sentences <= config.long_paragraph_sentences:
            continue
        if not sink.add(WritingSuggestion(
            category="structure",
            severity="medium",
            message=f"Long paragraph ({n_sentences} sentences). Consider splitting.",
            start=para.start,
            end=para.end,
        )):
            return


def single_sentence_paragraphs(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    for para in paragraph_spans(text):
        if len(split_sentences(para.text)) != 1:
            continue
        if len(para.text.split()) <= config.single_sentence_paragraph_words:
            continue
        if not sink.add(WritingSuggestion(
            category="structure",
            severity="low",
            message="Single-sentence paragraph. Consider developing this idea further.",
            start=para.start,
            end=para.end,
        )):
            return


def missing_transitions(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    if not config.paragraph_transitions:
        return
    pattern = _alternation(config.paragraph_transitions, r"\b")
    paragraphs = paragraph_spans(text)
    for number, para in enumerate(paragraphs[1:], start=2):
        sentences = split_sentences(para.text)
        if not sentences or pattern.search(sentences[0]):
            continue
        if not sink.add(WritingSuggestion(
            category="structure",
            severity="low",
            message=f"Paragraph {number} may need a transition from the previous one.",
        )):
            return


def wordy_phrases(text: str, config: AnalyzerConfig, sink: SuggestionSink) -> None:
    for raw_pattern, replacement in config.cliches:
        pattern = _compile_cliche(raw_pattern)
        if pattern is None:
            continue
        for match in pattern.finditer(text):
            if not sink.add(WritingSuggestion(
                category="style",
                severity="medium",
                message=f'Wordy phrase "{match.group(0)}". Consider "{replacement}".',
                start=match.start(),
                end=match.end(),
                suggestion=replacement,
            )):
                return


DEFAULT_RULES: tuple[Rule, ...] = (
    passive_voice,
    weak_qualifiers,
    word_repetition,
    long_sentences,
    long_paragraphs,
    single_sentence_paragraphs,
    missing_transitions,
    wordy_phrases,
)
