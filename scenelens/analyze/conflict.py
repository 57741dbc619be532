"""
scenelens.analyze.conflict - One-line conflict summary extraction.

Tries goal/obligation sentences first, then turning-point sentences, then
the first line of the scene's note.
"""

from __future__ import annotations

import re

from scenelens.models import ChapterNoteData, TrackedValue

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
MIN_SENTENCE_LENGTH = 10
MIN_NOTE_LENGTH = 5
DEFAULT_MAX_LENGTH = 90

GOAL_PATTERNS = (
    re.compile(r"\b(must|has to|needs? to|have to)\b.{0,60}", re.IGNORECASE),
    re.compile(r"\b(wants? to|tries? to|attempts? to)\b.{0,60}", re.IGNORECASE),
    re.compile(r"\b(can't|cannot|unable to|won't|refuses? to)\b.{0,60}", re.IGNORECASE),
    re.compile(r"\b(against|despite|versus|vs\.?)\b.{0,60}", re.IGNORECASE),
)
TURNING_POINT_RE = re.compile(r"^(but|however|yet|still|nevertheless)\b", re.IGNORECASE)


def summarize(snippet: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Truncate and capitalize the first letter, leaving the rest as written."""
    snippet = snippet[:max_length].strip()
    return snippet[:1].upper() + snippet[1:]


def first_name_tokens(characters: list[str]) -> list[str]:
    tokens = []
    for name in characters:
        parts = name.lower().split()
        if parts:
            tokens.append(parts[0])
    return tokens


def detect_conflict(
    text: str,
    characters: list[str],
    chapter_notes: ChapterNoteData | None,
    scene_name: str,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> TrackedValue[str]:
    """Extract a short conflict summary from scene text.

    Args:
        text: Raw scene text
        characters: Candidate character names in the scene
        chapter_notes: Notes for the chapter, if any
        scene_name: Scene heading used to look up the scene note
        max_length: Maximum summary length in characters

    Returns:
        TrackedValue with source 'auto'; empty string when nothing is found
    """
    if not text.strip():
        return TrackedValue[str].auto("")

    sentences = [
        s.strip() for s in SENTENCE_SPLIT_RE.split(text) if len(s.strip()) > MIN_SENTENCE_LENGTH
    ]
    name_tokens = first_name_tokens(characters)

    for sentence in sentences:
        lower = sentence.lower()
        for pattern in GOAL_PATTERNS:
            if not pattern.search(sentence):
                continue
            if not characters or any(token in lower for token in name_tokens):
                return TrackedValue[str].auto(summarize(sentence, max_length))

    for sentence in sentences:
        if TURNING_POINT_RE.match(sentence):
            return TrackedValue[str].auto(summarize(sentence, max_length))

    if chapter_notes is not None:
        note = chapter_notes.scene_notes.get(scene_name, "").strip()
        first_line = note.split("\n")[0].strip() if note else ""
        if len(first_line) > MIN_NOTE_LENGTH:
            return TrackedValue[str].auto(summarize(first_line, max_length))

    return TrackedValue[str].auto("")
