"""Tests for scenelens.scene module - single-scene analysis and overrides."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from scenelens.analyze.intensity import detect_intensity
from scenelens.config import SceneLensConfig
from scenelens.models import (
    ChapterNoteData,
    Emotion,
    MentionResult,
    MetadataSource,
    PlotBoardData,
    SceneMetadataOverrides,
)
from scenelens.scene import analyse_scene

SCENE_TEXT = "Mara must reach the tower before dawn. Tom waited by the harbor."


@pytest.fixture
def mentions() -> MentionResult:
    return MentionResult(characters=["Mara Quinn", "Tom"], locations=["Harbor"])


class TestAnalyseScene:
    def test_identity_and_mentions(self, mentions: MentionResult) -> None:
        scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "book/ch1.md", mentions)
        assert scene.name == "Arrival"
        assert scene.chapter_id == "ch1"
        assert scene.chapter_path == "book/ch1.md"
        assert scene.characters.value == ["Mara Quinn", "Tom"]
        assert scene.locations.value == ["Harbor"]
        assert scene.items.value == []
        assert scene.characters.source == MetadataSource.AUTO

    def test_detected_fields_are_auto(self, mentions: MentionResult) -> None:
        scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions)
        for field in ("pov", "emotion", "intensity", "conflict", "tags"):
            assert getattr(scene, field).source == MetadataSource.AUTO
        assert scene.conflict.value == "Mara must reach the tower before dawn"

    def test_statistics(self, mentions: MentionResult) -> None:
        scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions)
        assert scene.word_count == 12
        assert scene.dialogue_ratio == 0.0
        assert scene.avg_sentence_length == 6.0
        assert scene.punctuation_intensity == 0.0

    def test_notes_and_board_feed_tags(
        self,
        mentions: MentionResult,
        sample_notes: ChapterNoteData,
        sample_plot_board: PlotBoardData,
    ) -> None:
        scene = analyse_scene(
            SCENE_TEXT,
            "Arrival",
            "ch1",
            "",
            mentions,
            chapter_notes=sample_notes,
            plot_board=sample_plot_board,
        )
        assert "Revenge" in scene.tags.value
        assert "setup" in scene.tags.value

    def test_empty_scene(self) -> None:
        scene = analyse_scene("", "Empty", "ch1", "", MentionResult())
        assert scene.word_count == 0
        assert scene.pov.value == ""
        assert scene.emotion.value == Emotion.NEUTRAL
        assert scene.intensity.value == 0
        assert scene.conflict.value == ""
        assert scene.tags.value == []

    def test_config_threshold_is_used(self, mentions: MentionResult) -> None:
        config = SceneLensConfig(emotion_threshold=100)
        scene = analyse_scene("Fury! Rage! Wrath! Anger!", "Fight", "ch1", "", mentions, config=config)
        assert scene.emotion.value == Emotion.NEUTRAL

    def test_result_is_frozen(self, mentions: MentionResult) -> None:
        scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions)
        with pytest.raises(ValidationError):
            scene.name = "Other"


class TestOverrides:
    def test_pov_override_skips_detector(self, mentions: MentionResult) -> None:
        overrides = SceneMetadataOverrides(pov="Tom")
        with patch("scenelens.scene.detect_pov") as mock_pov:
            scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions, overrides=overrides)
        mock_pov.assert_not_called()
        assert scene.pov.value == "Tom"
        assert scene.pov.source == MetadataSource.MANUAL

    def test_emotion_override_feeds_intensity(self, mentions: MentionResult) -> None:
        overrides = SceneMetadataOverrides(emotion=Emotion.CHAOTIC)
        with (
            patch("scenelens.scene.detect_emotion") as mock_emotion,
            patch("scenelens.scene.detect_intensity", wraps=detect_intensity) as mock_intensity,
        ):
            scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions, overrides=overrides)
        mock_emotion.assert_not_called()
        assert mock_intensity.call_args.args[1] == Emotion.CHAOTIC
        assert scene.emotion.value == Emotion.CHAOTIC
        assert scene.emotion.source == MetadataSource.MANUAL
        assert scene.intensity.source == MetadataSource.AUTO

    def test_intensity_override(self, mentions: MentionResult) -> None:
        overrides = SceneMetadataOverrides(intensity=-7)
        with patch("scenelens.scene.detect_intensity") as mock_intensity:
            scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions, overrides=overrides)
        mock_intensity.assert_not_called()
        assert scene.intensity.value == -7
        assert scene.intensity.source == MetadataSource.MANUAL

    def test_empty_string_counts_as_manual(self, mentions: MentionResult) -> None:
        overrides = SceneMetadataOverrides(conflict="")
        with patch("scenelens.scene.detect_conflict") as mock_conflict:
            scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions, overrides=overrides)
        mock_conflict.assert_not_called()
        assert scene.conflict.value == ""
        assert scene.conflict.source == MetadataSource.MANUAL

    def test_empty_tag_list_counts_as_manual(self, mentions: MentionResult) -> None:
        overrides = SceneMetadataOverrides(tags=[])
        with patch("scenelens.scene.detect_tags") as mock_tags:
            scene = analyse_scene("#ignored", "Arrival", "ch1", "", mentions, overrides=overrides)
        mock_tags.assert_not_called()
        assert scene.tags.value == []
        assert scene.tags.source == MetadataSource.MANUAL

    def test_other_fields_still_detected(self, mentions: MentionResult) -> None:
        overrides = SceneMetadataOverrides(pov="Tom")
        scene = analyse_scene(SCENE_TEXT, "Arrival", "ch1", "", mentions, overrides=overrides)
        assert scene.conflict.source == MetadataSource.AUTO
        assert scene.conflict.value == "Mara must reach the tower before dawn"

    def test_intensity_override_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            SceneMetadataOverrides(intensity=11)

    def test_unknown_emotion_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SceneMetadataOverrides(emotion="bored")
