"""Heuristic word, sentence and paragraph segmentation.

Sentences end at any run of ``.``, ``!`` or ``?`` and paragraphs at two or
more newlines. Abbreviations such as "Mr." therefore end a sentence; the
detector thresholds are calibrated against this behaviour.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple

SENTENCE_BREAK = re.compile(r"[.!?]+")
PARAGRAPH_BREAK = re.compile(r"\n{2,}")


class Segment(NamedTuple):
    start: int
    end: int
    text: str


def _segments(text: str, separator: re.Pattern) -> Iterator[Segment]:
    pos = 0
    for match in separator.finditer(text):
        yield Segment(pos, match.start(), text[pos:match.start()])
        pos = match.end()
    yield Segment(pos, len(text), text[pos:])


def split_words(text: str) -> list[str]:
    return text.split()


def sentence_spans(text: str) -> list[Segment]:
    """Sentences with their offsets into ``text``; blank pieces are dropped."""
    return [s for s in _segments(text, SENTENCE_BREAK) if s.text.strip()]


def paragraph_spans(text: str) -> list[Segment]:
    return [p for p in _segments(text, PARAGRAPH_BREAK) if p.text.strip()]


def split_sentences(text: str) -> list[str]:
    return [s.text for s in sentence_spans(text)]


def split_paragraphs(text: str) -> list[str]:
    return [p.text for p in paragraph_spans(text)]
