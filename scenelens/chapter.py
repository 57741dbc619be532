"""
scenelens.chapter - Chapter-level folding and scene splitting.

compute_chapter_aggregate folds a chapter's scene records into one summary;
split_scenes cuts a chapter's markdown body into its "## " scene sections.
"""

from __future__ import annotations

import re
from collections import Counter

from scenelens.models import ChapterAggregateMetadata, Emotion, SceneMetadata
from scenelens.utils import round_half_up

SCENE_HEADING_RE = re.compile(r"^##\s+(.*)$")
SECTION_END_RE = re.compile(r"^#{1,2}\s")


def compute_chapter_aggregate(scenes: dict[str, SceneMetadata]) -> ChapterAggregateMetadata:
    """Compute aggregate chapter metadata from its scenes.

    Args:
        scenes: Scene metadata keyed by scene name, in scene order

    Returns:
        ChapterAggregateMetadata; the empty aggregate for no scenes
    """
    scene_list = list(scenes.values())
    if not scene_list:
        return ChapterAggregateMetadata()

    all_characters: dict[str, None] = {}
    all_locations: dict[str, None] = {}
    for scene in scene_list:
        all_characters.update(dict.fromkeys(scene.characters.value))
        all_locations.update(dict.fromkeys(scene.locations.value))

    # most_common keeps first-encountered order among equal counts
    pov_counts = Counter(s.pov.value for s in scene_list if s.pov.value)
    dominant_pov = pov_counts.most_common(1)[0][0] if pov_counts else ""

    emotion_counts = Counter(s.emotion.value for s in scene_list)
    dominant_emotion = emotion_counts.most_common(1)[0][0]

    intensity_arc = [s.intensity.value for s in scene_list]
    avg_intensity = sum(intensity_arc) / len(intensity_arc)

    return ChapterAggregateMetadata(
        all_characters=list(all_characters),
        all_locations=list(all_locations),
        dominant_pov=dominant_pov,
        avg_intensity=round_half_up(avg_intensity, 1),
        dominant_emotion=Emotion(dominant_emotion),
        total_word_count=sum(s.word_count for s in scene_list),
        intensity_arc=intensity_arc,
    )


def split_scenes(body: str) -> dict[str, str]:
    """Split a chapter body into scene sections.

    A scene starts at a "## " heading and runs until the next H1 or H2
    heading. Text before the first scene heading is not part of any scene.
    A repeated heading keeps its first section.

    Args:
        body: Chapter markdown text

    Returns:
        Dict mapping scene name to scene text, in document order
    """
    scenes: dict[str, str] = {}
    current: str | None = None
    lines: list[str] = []

    def flush() -> None:
        if current is not None and current not in scenes:
            scenes[current] = "\n".join(lines).strip("\n")

    for line in body.splitlines():
        heading = SCENE_HEADING_RE.match(line)
        if heading:
            flush()
            current = heading.group(1).strip()
            lines = []
        elif SECTION_END_RE.match(line):
            flush()
            current = None
            lines = []
        elif current is not None:
            lines.append(line)

    flush()
    return scenes
