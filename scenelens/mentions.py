"""
scenelens.mentions - Minimal entity mention finder.

Builds a MentionResult from known entity names by whole-word,
case-insensitive search. Names are ordered by where they first appear in
the scene, which is the order the POV resolver treats as detection order.
"""

from __future__ import annotations

import re

from scenelens.models import MentionResult


def find_mentions(text: str, names: list[str]) -> list[str]:
    """Return the names that occur in the text, ordered by first occurrence.

    Args:
        text: Scene text
        names: Known entity names

    Returns:
        Mentioned names; ties in position keep the input order
    """
    found = []
    for index, name in enumerate(dict.fromkeys(n.strip() for n in names if n.strip())):
        match = re.search(rf"(?<!\w){re.escape(name)}(?!\w)", text, re.IGNORECASE)
        if match:
            found.append((match.start(), index, name))
    return [name for _, _, name in sorted(found)]


def build_mentions(
    text: str,
    characters: list[str] | None = None,
    locations: list[str] | None = None,
    items: list[str] | None = None,
    lore: list[str] | None = None,
) -> MentionResult:
    """Scan a scene for every configured entity list."""
    return MentionResult(
        characters=find_mentions(text, characters or []),
        locations=find_mentions(text, locations or []),
        items=find_mentions(text, items or []),
        lore=find_mentions(text, lore or []),
    )
