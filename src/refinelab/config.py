"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_TRANSITION_WORDS: tuple[str, ...] = (
    "however", "therefore", "furthermore", "moreover", "consequently",
    "nevertheless", "additionally", "similarly", "conversely", "specifically",
    "ultimately", "meanwhile", "indeed", "thus", "hence", "nonetheless",
    "likewise", "accordingly",
)

DEFAULT_WEAK_QUALIFIERS: tuple[str, ...] = (
    "very", "really", "quite", "just", "rather", "fairly", "pretty",
)

# Smaller set checked against the first sentence of each body paragraph
DEFAULT_PARAGRAPH_TRANSITIONS: tuple[str, ...] = (
    "however", "therefore", "furthermore", "moreover", "additionally",
    "consequently", "similarly", "finally", "first", "second", "in addition",
    "for example", "in contrast", "as a result",
)

DEFAULT_PASSIVE_AUXILIARIES: tuple[str, ...] = (
    "is", "are", "was", "were", "be", "been", "being",
)

DEFAULT_CLICHES: tuple[tuple[str, str], ...] = (
    (r"\bat the end of the day\b", "ultimately"),
    (r"\bin order to\b", "to"),
    (r"\bdue to the fact that\b", "because"),
    (r"\bin spite of the fact that\b", "although"),
    (r"\bat this point in time\b", "now"),
    (r"\bfor all intents and purposes\b", "essentially"),
    (r"\bin the event that\b", "if"),
    (r"\bhas the ability to\b", "can"),
)


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 3
    timeout: int = 60
    max_tokens: int = 4096


_WORD_LISTS = ("transition_words", "weak_qualifiers", "paragraph_transitions", "passive_auxiliaries")


@dataclass(frozen=True)
class AnalyzerConfig:
    max_suggestions: int = 20
    long_sentence_words: int = 35
    long_paragraph_sentences: int = 8
    single_sentence_paragraph_words: int = 10
    repetition_word_length: int = 5
    repetition_threshold: int = 5
    academic_word_length: int = 8
    words_per_minute: int = 200
    debounce_ms: int = 1000
    transition_words: tuple[str, ...] = DEFAULT_TRANSITION_WORDS
    weak_qualifiers: tuple[str, ...] = DEFAULT_WEAK_QUALIFIERS
    paragraph_transitions: tuple[str, ...] = DEFAULT_PARAGRAPH_TRANSITIONS
    passive_auxiliaries: tuple[str, ...] = DEFAULT_PASSIVE_AUXILIARIES
    cliches: tuple[tuple[str, str], ...] = DEFAULT_CLICHES

    def __post_init__(self):
        # lowercase tuples; YAML hands over lists and cliché mappings
        for name in _WORD_LISTS:
            words = tuple(str(w).lower() for w in getattr(self, name))
            object.__setattr__(self, name, words)
        cliches = self.cliches.items() if isinstance(self.cliches, dict) else self.cliches
        object.__setattr__(self, "cliches", tuple((str(p), str(r)) for p, r in cliches))

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


@dataclass(frozen=True)
class EditorConfig:
    autosave_seconds: float = 30.0


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = "~/.refinelab/essays.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    store: StoreConfig = field(default_factory=StoreConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        analyzer=AnalyzerConfig(**raw.get("analyzer", {})),
        editor=EditorConfig(**raw.get("editor", {})),
        store=StoreConfig(**raw.get("store", {})),
    )
