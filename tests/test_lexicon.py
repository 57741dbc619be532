"""Tests for scenelens.lexicon module - bundled lexicon data and loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from scenelens.exceptions import LexiconError, SceneLensError
from scenelens.lexicon import (
    keyword_pattern,
    load_lexicon_file,
    load_lexicons,
    load_valence_table,
    select_lexicon,
)
from scenelens.models import Emotion


def write_lexicon(path: Path, data: dict) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True)
    return path


class TestBundledLexicons:
    def test_default_comes_first(self) -> None:
        lexicons = load_lexicons()
        assert lexicons[0].name == "en"
        assert lexicons[0].default
        assert [lex.name for lex in lexicons] == ["en", "de"]

    def test_cached(self) -> None:
        assert load_lexicons() is load_lexicons()

    def test_weights_in_range(self) -> None:
        for lexicon in load_lexicons():
            for emotion in Emotion:
                for _, weight in lexicon.keywords(emotion):
                    assert weight in (1, 2, 3)

    def test_no_duplicate_keywords_per_emotion(self) -> None:
        for lexicon in load_lexicons():
            for emotion in Emotion:
                words = [keyword for keyword, _ in lexicon.keywords(emotion)]
                assert len(words) == len(set(words)), f"{lexicon.name}/{emotion.value}"

    def test_no_duplicate_action_verbs(self) -> None:
        for lexicon in load_lexicons():
            assert len(lexicon.action_verbs) == len(set(lexicon.action_verbs))

    def test_neutral_has_no_keywords(self) -> None:
        for lexicon in load_lexicons():
            assert lexicon.keywords(Emotion.NEUTRAL) == ()

    def test_lexicon_is_frozen(self) -> None:
        with pytest.raises(ValidationError):
            load_lexicons()[0].name = "xx"


class TestSelectLexicon:
    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("en", "en"),
            ("EN-us", "en"),
            ("de", "de"),
            ("DE", "de"),
            ("de-guillemet", "de"),
            ("fr", "en"),
            ("", "en"),
        ],
    )
    def test_prefix_dispatch(self, locale: str, expected: str) -> None:
        assert select_lexicon(locale).name == expected


class TestValenceTable:
    def test_values(self) -> None:
        table = load_valence_table()
        assert table.base(Emotion.CHAOTIC) == 7
        assert table.base(Emotion.TENSE) == 5
        assert table.base(Emotion.NEUTRAL) == 0
        assert table.base(Emotion.SORROWFUL) == -4

    def test_every_emotion_listed(self) -> None:
        assert set(load_valence_table().base_intensity) == set(Emotion)


class TestKeywordPattern:
    def test_matches_longer_words(self) -> None:
        assert keyword_pattern("wit").search("with") is not None
        assert keyword_pattern("calm").search("calmed") is not None

    def test_anchored_at_word_start(self) -> None:
        assert keyword_pattern("wit").search("outwit") is None

    def test_case_insensitive(self) -> None:
        assert keyword_pattern("calm").search("Calm down") is not None

    def test_cached(self) -> None:
        assert keyword_pattern("calm") is keyword_pattern("calm")


class TestLoadLexiconFile:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = write_lexicon(
            tmp_path / "xx.yaml",
            {
                "version": 2,
                "name": "xx",
                "locale_prefixes": ["XX"],
                "emotions": {"joyful": [["yay", 3]]},
                "action_verbs": ["Zoom"],
            },
        )
        lexicon = load_lexicon_file(path)
        assert lexicon.version == 2
        assert lexicon.locale_prefixes == ("xx",)
        assert lexicon.keywords(Emotion.JOYFUL) == (("yay", 3),)
        assert lexicon.action_verbs == ("zoom",)
        assert lexicon.matches("xx-yy")

    def test_bad_weight(self, tmp_path: Path) -> None:
        path = write_lexicon(
            tmp_path / "xx.yaml",
            {"version": 1, "name": "xx", "emotions": {"joyful": [["yay", 5]]}},
        )
        with pytest.raises(LexiconError, match="xx.yaml"):
            load_lexicon_file(path)

    def test_unknown_emotion(self, tmp_path: Path) -> None:
        path = write_lexicon(
            tmp_path / "xx.yaml",
            {"version": 1, "name": "xx", "emotions": {"bored": [["meh", 1]]}},
        )
        with pytest.raises(LexiconError):
            load_lexicon_file(path)

    def test_missing_version(self, tmp_path: Path) -> None:
        path = write_lexicon(tmp_path / "xx.yaml", {"name": "xx", "emotions": {}})
        with pytest.raises(LexiconError):
            load_lexicon_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(LexiconError, match="file not found"):
            load_lexicon_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "xx.yaml"
        path.write_text("version: [1\n")
        with pytest.raises(LexiconError, match="invalid YAML"):
            load_lexicon_file(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "xx.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(SceneLensError):
            load_lexicon_file(path)
