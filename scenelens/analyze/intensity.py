"""
scenelens.analyze.intensity - Narrative intensity scoring.

Combines five weighted signals (action density, sentence rhythm,
punctuation, dialogue exchanges, emotional valence) into a raw 0-8 score and
rescales it to an integer in [-10, 10].
"""

from __future__ import annotations

from scenelens.analyze.text_stats import (
    compute_dialogue_ratio,
    count_dashes,
    count_exclamations,
    count_questions,
    count_short_exchanges,
    count_words,
    split_sentences,
)
from scenelens.config import IntensityWeights
from scenelens.lexicon import load_valence_table, select_lexicon
from scenelens.models import Emotion, TrackedValue
from scenelens.utils import clamp, round_half_up

MAX_ACTION_HITS = 10
FALLBACK_SENTENCE_LENGTH = 15.0
MAX_SIGNAL = 8.0
RAPID_EXCHANGE_COUNT = 5
RAPID_EXCHANGE_SIGNAL = 5.0


def count_action_verbs(text: str, locale: str) -> int:
    """Count distinct locale action verbs present anywhere in the text."""
    lower_text = text.lower()
    return sum(1 for verb in select_lexicon(locale).action_verbs if verb in lower_text)


def average_sentence_words(text: str) -> float:
    sentences = split_sentences(text)
    if not sentences:
        return FALLBACK_SENTENCE_LENGTH
    return sum(count_words(s) for s in sentences) / len(sentences)


def score_intensity_components(
    text: str,
    emotion: Emotion,
    locale: str,
    weights: IntensityWeights | None = None,
) -> dict[str, float]:
    """Compute each weighted intensity signal.

    Args:
        text: Raw scene text
        emotion: Already-resolved scene emotion
        locale: Language code used to select the action-verb list
        weights: Signal weights from config

    Returns:
        Dict with weighted "action", "rhythm", "punctuation", "dialogue"
        and "valence" contributions
    """
    weights = weights or IntensityWeights()
    words = count_words(text) or 1

    action_density = min(1.0, count_action_verbs(text, locale) / MAX_ACTION_HITS)
    action = action_density * 10 * weights.action

    # avg 5 words -> 8, avg 25 words -> 0
    avg_len = average_sentence_words(text)
    rhythm = clamp(8 - (avg_len - 5) * 0.4, 0, MAX_SIGNAL) * weights.rhythm

    marks = count_exclamations(text) + count_questions(text) * 0.7 + count_dashes(text) * 0.5
    punctuation = min(MAX_SIGNAL, marks / words * 100) * weights.punctuation

    if count_short_exchanges(text) > RAPID_EXCHANGE_COUNT:
        dialogue = RAPID_EXCHANGE_SIGNAL * weights.dialogue
    else:
        dialogue = compute_dialogue_ratio(text) * 3 * weights.dialogue

    valence = load_valence_table().base(emotion) * weights.valence

    return {
        "action": action,
        "rhythm": rhythm,
        "punctuation": punctuation,
        "dialogue": dialogue,
        "valence": valence,
    }


def normalize_intensity(raw: float) -> int:
    """Map a raw 0-8 composite onto the -10..10 scale."""
    normalized = int(round_half_up(raw / 5 * 10 - 2))
    return int(clamp(normalized, -10, 10))


def detect_intensity(
    text: str,
    emotion: Emotion,
    locale: str,
    weights: IntensityWeights | None = None,
) -> TrackedValue[int]:
    """Compute narrative intensity (-10 to 10) for a scene.

    Args:
        text: Raw scene text
        emotion: Already-resolved scene emotion (auto or manual)
        locale: Language code
        weights: Signal weights from config

    Returns:
        TrackedValue with source 'auto'
    """
    if not text.strip():
        return TrackedValue[int].auto(0)

    components = score_intensity_components(text, emotion, locale, weights)
    return TrackedValue[int].auto(normalize_intensity(sum(components.values())))
