"""
scenelens.analyze.text_stats - Raw text statistics for a scene.

Word count, dialogue ratio, average sentence length and punctuation
density. Every function is total: empty or markup-only text yields 0.
"""

from __future__ import annotations

import re

HEADING_RE = re.compile(r"^#{1,6}\s+.*$", re.MULTILINE)
IMAGE_RE = re.compile(r"!\[.*?\]\(.*?\)")
LINK_RE = re.compile(r"\[.*?\]\(.*?\)")
MARKDOWN_CHARS_RE = re.compile(r"[*_`~#>|]")

# Letters/digits, optionally joined by an internal apostrophe or hyphen.
WORD_RE = re.compile(r"[^\W_]+(?:['’\-][^\W_]+)*")

# ASCII "double", low-high „German“ and «guillemet» quoting.
DIALOGUE_RE = re.compile(r'"[^"]*"|„[^“]*“|«[^»]*»')
SHORT_EXCHANGE_RE = re.compile(r'"[^"]{0,60}"')

SENTENCE_SPLIT_RE = re.compile(r"[.!?…]+")
ELLIPSIS_RE = re.compile(r"\.\.\.|…")
DASH_RE = re.compile(r"[—–]")
WHITESPACE_RE = re.compile(r"\s+")


def strip_markdown(text: str) -> str:
    """Remove headings, images, links and markdown punctuation."""
    cleaned = HEADING_RE.sub("", text)
    cleaned = IMAGE_RE.sub("", cleaned)
    cleaned = LINK_RE.sub(" ", cleaned)
    cleaned = MARKDOWN_CHARS_RE.sub(" ", cleaned)
    return cleaned.strip()


def count_words(text: str) -> int:
    """Count words in a text string, ignoring markdown markup.

    Args:
        text: Raw scene text

    Returns:
        Number of word tokens (0 for empty or markup-only text)
    """
    cleaned = strip_markdown(text)
    if not cleaned:
        return 0
    return len(WORD_RE.findall(cleaned))


def split_sentences(text: str) -> list[str]:
    """Split on sentence punctuation and ellipses, dropping blank fragments."""
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def compute_dialogue_ratio(text: str) -> float:
    """Compute the share of the text that sits inside quotation marks.

    Args:
        text: Raw scene text

    Returns:
        Ratio in [0, 1]; 0 for empty text or text without words
    """
    if not text or count_words(text) == 0:
        return 0.0

    dialogue_chars = sum(len(m.group(0)) for m in DIALOGUE_RE.finditer(text))

    total_chars = len(WHITESPACE_RE.sub(" ", text))
    if total_chars == 0:
        return 0.0
    return min(1.0, dialogue_chars / total_chars)


def compute_avg_sentence_length(text: str) -> float:
    """Compute average sentence length in words."""
    if not text.strip():
        return 0.0
    sentences = split_sentences(text)
    if not sentences:
        return 0.0
    return sum(count_words(s) for s in sentences) / len(sentences)


def compute_punctuation_intensity(text: str) -> float:
    """Compute exclamation + question mark density (count per 100 words)."""
    words = count_words(text)
    if words == 0:
        return 0.0
    marks = text.count("!") + text.count("?")
    return (marks / words) * 100


def count_exclamations(text: str) -> int:
    return text.count("!")


def count_questions(text: str) -> int:
    return text.count("?")


def count_ellipses(text: str) -> int:
    return len(ELLIPSIS_RE.findall(text))


def count_dashes(text: str) -> int:
    return len(DASH_RE.findall(text))


def count_short_exchanges(text: str) -> int:
    """Count quoted lines of at most 60 characters."""
    return len(SHORT_EXCHANGE_RE.findall(text))
