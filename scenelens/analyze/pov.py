"""
scenelens.analyze.pov - Point-of-view character resolution.

Chooses among character names already detected in the scene. Strong
first-person narration, an absent signal and ambiguous scores all fall back
to the first-listed candidate rather than guessing.
"""

from __future__ import annotations

import re

from scenelens.analyze.text_stats import count_words
from scenelens.models import TrackedValue

FIRST_PERSON_RE = re.compile(r"\b(?:I|I'm|I've|I'll|I'd|my|mine|myself|me)\b", re.IGNORECASE)
PARAGRAPH_SPLIT_RE = re.compile(r"\n\n+")
OPENING_SENTENCE_SPLIT_RE = re.compile(r"[.!?]\s+")

DEFAULT_FIRST_PERSON_RATIO = 0.015
DEFAULT_AMBIGUITY_RATIO = 1.3
OPENING_SENTENCES = 5


def name_variants(name: str) -> list[str]:
    """Lowercased full name plus first token for multi-word names."""
    variants = [name.lower()]
    parts = name.split()
    if len(parts) > 1:
        variants.append(parts[0].lower())
    return [v for v in variants if len(v) >= 2]


def first_person_ratio(text: str) -> float:
    total_words = count_words(text) or 1
    return len(FIRST_PERSON_RE.findall(text)) / total_words


def score_candidates(text: str, characters: list[str]) -> list[tuple[str, float]]:
    """Score each candidate by mention frequency and early placement.

    Args:
        text: Raw scene text
        characters: Candidate names in detection order

    Returns:
        List of (name, score) in the same order as ``characters``
    """
    lower_text = text.lower()
    paragraphs = PARAGRAPH_SPLIT_RE.split(text)
    first_para = paragraphs[0].lower() if paragraphs else ""
    opening = " ".join(OPENING_SENTENCE_SPLIT_RE.split(text)[:OPENING_SENTENCES]).lower()

    scored = []
    for name in characters:
        score = 0.0
        for variant in name_variants(name):
            count = len(re.findall(rf"(?<!\w){re.escape(variant)}(?!\w)", lower_text))
            score += count
            if variant in first_para:
                score += count * 0.5
            if variant in opening:
                score += 2
        scored.append((name, score))
    return scored


def detect_pov(
    text: str,
    characters: list[str],
    first_person_threshold: float = DEFAULT_FIRST_PERSON_RATIO,
    ambiguity_ratio: float = DEFAULT_AMBIGUITY_RATIO,
) -> TrackedValue[str]:
    """Detect the most likely POV character from scene text.

    Args:
        text: Raw scene text
        characters: Names already detected in the scene, in detection order
        first_person_threshold: Pronoun density above which the first
            candidate is taken as the narrator
        ambiguity_ratio: Minimum top/second score ratio for a confident pick

    Returns:
        TrackedValue with source 'auto'; empty string with no candidates
    """
    if not characters:
        return TrackedValue[str].auto("")
    if len(characters) == 1:
        return TrackedValue[str].auto(characters[0])

    fallback = characters[0]

    if first_person_ratio(text) > first_person_threshold:
        return TrackedValue[str].auto(fallback)

    ranked = sorted(score_candidates(text, characters), key=lambda item: item[1], reverse=True)
    top_name, top_score = ranked[0]
    if top_score == 0:
        return TrackedValue[str].auto(fallback)

    second_score = ranked[1][1] if len(ranked) > 1 else 0.0
    if second_score > 0 and top_score / second_score < ambiguity_ratio:
        return TrackedValue[str].auto(fallback)

    return TrackedValue[str].auto(top_name)
