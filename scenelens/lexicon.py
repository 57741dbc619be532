"""
scenelens.lexicon - Emotion lexicon and valence table loading.

Lexicons are versioned YAML files shipped in scenelens/lexicons/. Each file
maps emotions to ordered (keyword, weight) pairs and carries the locale's
action-verb list. Files are validated once on first use and cached; callers
get the same immutable objects on every call.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scenelens.exceptions import LexiconError
from scenelens.logging import logger
from scenelens.models import Emotion

LEXICONS_DIR = Path(__file__).parent / "lexicons"
LEXICON_FILES = ("en.yaml", "de.yaml")
VALENCE_FILE = "valence.yaml"


class EmotionLexicon(BaseModel):
    """Keyword table for one locale family."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(ge=1)
    name: str
    default: bool = False
    locale_prefixes: tuple[str, ...] = ()
    emotions: dict[Emotion, tuple[tuple[str, int], ...]]
    action_verbs: tuple[str, ...] = ()

    @field_validator("emotions")
    @classmethod
    def validate_weights(
        cls, v: dict[Emotion, tuple[tuple[str, int], ...]]
    ) -> dict[Emotion, tuple[tuple[str, int], ...]]:
        for emotion, pairs in v.items():
            for keyword, weight in pairs:
                if not keyword.strip():
                    raise ValueError(f"Empty keyword under '{emotion.value}'")
                if weight not in (1, 2, 3):
                    raise ValueError(
                        f"Weight for '{keyword}' under '{emotion.value}' must be 1, 2 or 3"
                    )
        return v

    @field_validator("locale_prefixes", "action_verbs")
    @classmethod
    def lowercase_entries(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(s.strip().lower() for s in v if s.strip())

    def keywords(self, emotion: Emotion) -> tuple[tuple[str, int], ...]:
        return self.emotions.get(emotion, ())

    def matches(self, locale: str) -> bool:
        locale = locale.strip().lower()
        return any(locale.startswith(prefix) for prefix in self.locale_prefixes)


class ValenceTable(BaseModel):
    """Base narrative charge per emotion."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(ge=1)
    base_intensity: dict[Emotion, int]

    def base(self, emotion: Emotion) -> int:
        return self.base_intensity.get(emotion, 0)


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise LexiconError(path.name, "file not found")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LexiconError(path.name, f"invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise LexiconError(path.name, "expected a mapping at the top level")
    return data


def load_lexicon_file(path: Path) -> EmotionLexicon:
    """Load and validate a single lexicon file.

    Raises:
        LexiconError: If the file is missing, unparsable or fails validation
    """
    data = _read_yaml(path)
    try:
        return EmotionLexicon(**data)
    except ValidationError as e:
        raise LexiconError(path.name, str(e)) from e


@lru_cache(maxsize=1)
def load_lexicons() -> tuple[EmotionLexicon, ...]:
    """Load every bundled lexicon, default first."""
    lexicons = [load_lexicon_file(LEXICONS_DIR / name) for name in LEXICON_FILES]
    defaults = [lex for lex in lexicons if lex.default]
    if len(defaults) != 1:
        raise LexiconError(LEXICONS_DIR.name, "exactly one lexicon must be marked default")
    return tuple(defaults + [lex for lex in lexicons if not lex.default])


@lru_cache(maxsize=1)
def load_valence_table() -> ValenceTable:
    """Load the emotion base-intensity table."""
    path = LEXICONS_DIR / VALENCE_FILE
    data = _read_yaml(path)
    try:
        return ValenceTable(**data)
    except ValidationError as e:
        raise LexiconError(path.name, str(e)) from e


@lru_cache(maxsize=32)
def select_lexicon(locale: str) -> EmotionLexicon:
    """Pick the lexicon whose locale prefix matches, else the default."""
    lexicons = load_lexicons()
    default = lexicons[0]
    for lexicon in lexicons[1:]:
        if lexicon.matches(locale):
            logger.debug("Locale %r uses lexicon %r v%d", locale, lexicon.name, lexicon.version)
            return lexicon
    if not default.matches(locale):
        logger.debug("No lexicon for locale %r, falling back to %r", locale, default.name)
    return default


@lru_cache(maxsize=4096)
def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Compile a keyword anchored at a word start.

    Only the start is anchored, so stems match their inflections
    ("laugh" scores "laughter", "kämpf" scores "kämpfend").
    """
    return re.compile(rf"\b{re.escape(keyword)}", re.IGNORECASE)
