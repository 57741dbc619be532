"""
scenelens.analyze.tags - Plotline tag aggregation.

Collects plot-board labels and #hashtags from the board, the notes and the
scene text into one de-duplicated list, keeping first-seen order.
"""

from __future__ import annotations

import re

from scenelens.models import ChapterNoteData, PlotBoardData, TrackedValue

HASHTAG_RE = re.compile(r"#(\w+)")
DEFAULT_MAX_LABEL_LENGTH = 40


def extract_hashtags(text: str) -> list[str]:
    """Return hashtag names (without '#') in order of appearance."""
    return HASHTAG_RE.findall(text or "")


def card_label_names(plot_board: PlotBoardData, chapter_id: str) -> list[str]:
    """Resolve the label ids on this chapter's card to label names."""
    names_by_id = {label.id: label.name for label in plot_board.labels}
    names = []
    for label_id in plot_board.card_labels.get(chapter_id, []):
        name = names_by_id.get(label_id, label_id)
        if name and name.strip():
            names.append(name.strip())
    return names


def detect_tags(
    plot_board: PlotBoardData | None,
    chapter_notes: ChapterNoteData | None,
    chapter_id: str,
    scene_name: str,
    text: str,
    max_label_length: int = DEFAULT_MAX_LABEL_LENGTH,
) -> TrackedValue[list[str]]:
    """Detect plotline/subplot tags for a scene.

    Args:
        plot_board: Project plot board snapshot
        chapter_notes: Notes for the chapter, if any
        chapter_id: Stable chapter id
        scene_name: Scene heading
        text: Raw scene text
        max_label_length: Board labels at or above this length are
            treated as statuses rather than plotline names

    Returns:
        TrackedValue with source 'auto'
    """
    tags: dict[str, None] = {}

    def add(tag: str) -> None:
        tags.setdefault(tag, None)

    if plot_board is not None:
        for name in card_label_names(plot_board, chapter_id):
            add(name)

        for label in plot_board.labels:
            name = label.name.strip()
            if name and len(name) < max_label_length:
                add(name)

        for cell_text in plot_board.cells.get(chapter_id, {}).values():
            for tag in extract_hashtags(cell_text):
                add(tag)

    if chapter_notes is not None:
        for note_text in (chapter_notes.chapter_note, chapter_notes.scene_notes.get(scene_name, "")):
            for tag in extract_hashtags(note_text):
                add(tag)

    for tag in extract_hashtags(text):
        add(tag)

    return TrackedValue[list[str]].auto(list(tags))
