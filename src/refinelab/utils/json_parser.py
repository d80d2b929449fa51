"""Pull a JSON payload out of a model reply."""

from __future__ import annotations

import json
import re

_FENCED = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def extract_json(text: str) -> dict | list:
    """Parse JSON from a model reply.

    Accepts a bare JSON document, a ```json fenced block, or prose wrapping a
    single object or array. Raises ValueError when nothing parses.
    """
    text = (text or "").strip()
    candidates = [text]
    candidates += [m.group(1) for m in _FENCED.finditer(text)]
    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = text.find(opener), text.rfind(closer)
        if start != -1 and end > start:
            candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")
