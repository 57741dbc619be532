"""
scenelens.scene - Single-scene analysis.

Runs every detector whose field has no manual override and assembles one
immutable SceneMetadata snapshot. Fields with an override keep the user's
value with source 'manual' and their detector is never called.
"""

from __future__ import annotations

from scenelens.analyze.conflict import detect_conflict
from scenelens.analyze.emotion import detect_emotion
from scenelens.analyze.intensity import detect_intensity
from scenelens.analyze.pov import detect_pov
from scenelens.analyze.tags import detect_tags
from scenelens.analyze.text_stats import (
    compute_avg_sentence_length,
    compute_dialogue_ratio,
    compute_punctuation_intensity,
    count_words,
)
from scenelens.config import SceneLensConfig
from scenelens.logging import logger
from scenelens.models import (
    ChapterNoteData,
    Emotion,
    MentionResult,
    PlotBoardData,
    SceneMetadata,
    SceneMetadataOverrides,
    TrackedValue,
)


def analyse_scene(
    scene_text: str,
    scene_name: str,
    chapter_id: str,
    chapter_path: str,
    mentions: MentionResult,
    chapter_notes: ChapterNoteData | None = None,
    plot_board: PlotBoardData | None = None,
    overrides: SceneMetadataOverrides | None = None,
    locale: str = "en",
    config: SceneLensConfig | None = None,
) -> SceneMetadata:
    """Analyse one scene section and return its metadata.

    Args:
        scene_text: Raw text of the scene section
        scene_name: Scene heading text
        chapter_id: Stable chapter id
        chapter_path: Project-relative path of the chapter file
        mentions: Entity names already detected in the scene
        chapter_notes: Chapter and scene notes for this chapter
        plot_board: Plot board snapshot
        overrides: Manual field values for this scene
        locale: Language code for lexicon selection (e.g. "en", "de-guillemet")
        config: Tuning parameters; defaults when omitted

    Returns:
        SceneMetadata snapshot
    """
    config = config or SceneLensConfig()
    overrides = overrides or SceneMetadataOverrides()

    if overrides.pov is not None:
        pov = TrackedValue[str].manual(overrides.pov)
    else:
        pov = detect_pov(
            scene_text,
            mentions.characters,
            first_person_threshold=config.pov_first_person_ratio,
            ambiguity_ratio=config.pov_ambiguity_ratio,
        )

    if overrides.emotion is not None:
        emotion = TrackedValue[Emotion].manual(overrides.emotion)
    else:
        emotion = detect_emotion(scene_text, locale, threshold=config.emotion_threshold)

    if overrides.intensity is not None:
        intensity = TrackedValue[int].manual(overrides.intensity)
    else:
        intensity = detect_intensity(
            scene_text, emotion.value, locale, weights=config.intensity_weights
        )

    if overrides.conflict is not None:
        conflict = TrackedValue[str].manual(overrides.conflict)
    else:
        conflict = detect_conflict(
            scene_text,
            mentions.characters,
            chapter_notes,
            scene_name,
            max_length=config.conflict_max_length,
        )

    if overrides.tags is not None:
        tags = TrackedValue[list[str]].manual(list(overrides.tags))
    else:
        tags = detect_tags(
            plot_board,
            chapter_notes,
            chapter_id,
            scene_name,
            scene_text,
            max_label_length=config.max_label_length,
        )

    manual = [name for name, value in overrides.model_dump().items() if value is not None]
    if manual:
        logger.debug("Scene %r: kept manual values for %s", scene_name, ", ".join(manual))
    logger.debug(
        "Scene %r: pov=%r emotion=%s intensity=%d",
        scene_name,
        pov.value,
        emotion.value.value,
        intensity.value,
    )

    return SceneMetadata(
        name=scene_name,
        chapter_id=chapter_id,
        chapter_path=chapter_path,
        pov=pov,
        characters=TrackedValue[list[str]].auto(list(mentions.characters)),
        locations=TrackedValue[list[str]].auto(list(mentions.locations)),
        items=TrackedValue[list[str]].auto(list(mentions.items)),
        lore=TrackedValue[list[str]].auto(list(mentions.lore)),
        emotion=emotion,
        intensity=intensity,
        conflict=conflict,
        tags=tags,
        word_count=count_words(scene_text),
        dialogue_ratio=compute_dialogue_ratio(scene_text),
        avg_sentence_length=compute_avg_sentence_length(scene_text),
        punctuation_intensity=compute_punctuation_intensity(scene_text),
    )
