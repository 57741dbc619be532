"""
scenelens.analyze.emotion - Lexicon and structure based emotion detection.

Scores every emotion from weighted keyword hits, adds structural boosts from
sentence rhythm and punctuation clusters, and picks the winner by scanning
emotions in their canonical declaration order.
"""

from __future__ import annotations

from scenelens.analyze.text_stats import (
    compute_avg_sentence_length,
    count_ellipses,
    count_exclamations,
    count_questions,
)
from scenelens.lexicon import keyword_pattern, select_lexicon
from scenelens.logging import logger
from scenelens.models import Emotion, TrackedValue

DEFAULT_EMOTION_THRESHOLD = 2

# (emotion, bonus) pairs per structural signal
SHORT_SENTENCE_BOOSTS = ((Emotion.TENSE, 3), (Emotion.CHAOTIC, 2))
LONG_SENTENCE_BOOSTS = ((Emotion.PEACEFUL, 2), (Emotion.MELANCHOLIC, 1), (Emotion.ROMANTIC, 1))
EXCLAMATION_BOOSTS = ((Emotion.ANGRY, 2), (Emotion.CHAOTIC, 1), (Emotion.JOYFUL, 1))
QUESTION_BOOSTS = ((Emotion.MYSTERIOUS, 2),)
ELLIPSIS_BOOSTS = ((Emotion.MELANCHOLIC, 1), (Emotion.MYSTERIOUS, 1))


def score_keywords(text: str, locale: str) -> dict[Emotion, int]:
    """Sum keyword weights per emotion for the locale's lexicon.

    Args:
        text: Raw scene text
        locale: Language code, e.g. "en" or "de-guillemet"

    Returns:
        Dict mapping every emotion (canonical order) to its keyword score
    """
    lexicon = select_lexicon(locale)
    scores = {emotion: 0 for emotion in Emotion}

    for emotion in Emotion:
        for keyword, weight in lexicon.keywords(emotion):
            hits = len(keyword_pattern(keyword).findall(text))
            scores[emotion] += hits * weight

    return scores


def apply_structural_boosts(text: str, scores: dict[Emotion, int]) -> dict[Emotion, int]:
    """Add rhythm and punctuation-cluster bonuses to keyword scores."""
    boosted = dict(scores)

    def boost(pairs: tuple[tuple[Emotion, int], ...]) -> None:
        for emotion, bonus in pairs:
            boosted[emotion] = boosted.get(emotion, 0) + bonus

    avg_len = compute_avg_sentence_length(text)
    if 0 < avg_len < 8:
        boost(SHORT_SENTENCE_BOOSTS)
    if avg_len > 20:
        boost(LONG_SENTENCE_BOOSTS)
    if count_exclamations(text) > 3:
        boost(EXCLAMATION_BOOSTS)
    if count_questions(text) > 3:
        boost(QUESTION_BOOSTS)
    if count_ellipses(text) > 2:
        boost(ELLIPSIS_BOOSTS)

    return boosted


def score_emotions(text: str, locale: str) -> dict[Emotion, int]:
    """Compute the final per-emotion scores used for classification."""
    return apply_structural_boosts(text, score_keywords(text, locale))


def pick_emotion(
    scores: dict[Emotion, int],
    threshold: int = DEFAULT_EMOTION_THRESHOLD,
) -> Emotion:
    """Choose the top-scoring emotion, or neutral below the threshold.

    Ties go to the emotion that comes first in canonical order. Close
    runner-ups do not demote the winner to neutral.
    """
    top_emotion = Emotion.NEUTRAL
    top_score = 0
    for emotion in Emotion:
        score = scores.get(emotion, 0)
        if score > top_score:
            top_score = score
            top_emotion = emotion

    if top_score < threshold:
        return Emotion.NEUTRAL
    return top_emotion


def detect_emotion(
    text: str,
    locale: str,
    threshold: int = DEFAULT_EMOTION_THRESHOLD,
) -> TrackedValue[Emotion]:
    """Detect the dominant emotion of a scene.

    Args:
        text: Raw scene text
        locale: Language code used to select the lexicon
        threshold: Minimum winning score; anything lower is neutral

    Returns:
        TrackedValue with source 'auto'
    """
    if not text.strip():
        return TrackedValue[Emotion].auto(Emotion.NEUTRAL)

    scores = score_emotions(text, locale)
    emotion = pick_emotion(scores, threshold)
    logger.debug("Emotion scores: %s -> %s", {e.value: s for e, s in scores.items() if s}, emotion.value)
    return TrackedValue[Emotion].auto(emotion)
