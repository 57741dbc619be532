"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from scenelens.models import (
    ChapterNoteData,
    Emotion,
    PlotBoardData,
    SceneMetadata,
    TrackedValue,
)

NEUTRAL_TEXT = (
    "The committee reviewed the quarterly budget figures on Tuesday morning. "
    "Everyone agreed the numbers looked reasonable for this year."
)

STACCATO_TEXT = "Tom stood up! The door opened! Nobody spoke! He waited! It was late."


@pytest.fixture
def neutral_text() -> str:
    """Two plain sentences with no lexicon hits and no action verbs."""
    return NEUTRAL_TEXT


@pytest.fixture
def staccato_text() -> str:
    """Five short sentences, four of them exclamations, no lexicon hits."""
    return STACCATO_TEXT


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a temporary project directory with a scenelens.yaml."""
    project_dir = tmp_path / "test_project"
    project_dir.mkdir()

    config = {
        "project_name": "test_project",
        "locale": "en",
        "characters": ["Mara Quinn", "Tom"],
        "locations": ["Harbor"],
    }
    with open(project_dir / "scenelens.yaml", "w") as f:
        yaml.dump(config, f)

    return project_dir


@pytest.fixture
def sample_plot_board() -> PlotBoardData:
    """Return a plot board with one labelled card and hashtag cells."""
    return PlotBoardData(
        columns=[
            {"id": "col-a", "name": "Main plot"},
            {"id": "col-b", "name": "Subplot"},
        ],
        cells={
            "ch1": {"col-a": "The theft #heist", "col-b": "#romance blooms"},
            "ch2": {"col-a": "#aftermath"},
        },
        labels=[
            {"id": "lbl-1", "name": "Heist", "color": "#ff0000"},
            {"id": "lbl-2", "name": "Revenge"},
            {"id": "lbl-3", "name": "Draft needs a full structural rewrite before beta"},
        ],
        card_labels={"ch1": ["lbl-2"], "ch2": ["lbl-1"]},
    )


@pytest.fixture
def sample_notes() -> ChapterNoteData:
    """Return chapter notes with a note for the scene "Arrival"."""
    return ChapterNoteData(
        chapter_note="Opening chapter #setup",
        scene_notes={"Arrival": "the heist begins #heist\nmore detail later"},
    )


@pytest.fixture
def make_scene() -> Callable[..., SceneMetadata]:
    """Return a factory for SceneMetadata records with sensible defaults."""

    def _make(
        name: str = "Scene",
        pov: str = "",
        characters: list[str] | None = None,
        locations: list[str] | None = None,
        emotion: Emotion = Emotion.NEUTRAL,
        intensity: int = 0,
        word_count: int = 100,
    ) -> SceneMetadata:
        return SceneMetadata(
            name=name,
            chapter_id="ch1",
            pov=TrackedValue[str].auto(pov),
            characters=TrackedValue[list[str]].auto(characters or []),
            locations=TrackedValue[list[str]].auto(locations or []),
            items=TrackedValue[list[str]].auto([]),
            lore=TrackedValue[list[str]].auto([]),
            emotion=TrackedValue[Emotion].auto(emotion),
            intensity=TrackedValue[int].auto(intensity),
            conflict=TrackedValue[str].auto(""),
            tags=TrackedValue[list[str]].auto([]),
            word_count=word_count,
        )

    return _make
