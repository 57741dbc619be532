"""
scenelens.models - Scene and chapter metadata records.

Every record here is a frozen value object: the engine builds a fresh
snapshot per call and never mutates one in place.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

T = TypeVar("T")


class MetadataSource(str, Enum):
    """How a tracked field got its value."""

    AUTO = "auto"
    MANUAL = "manual"
    AI = "ai"


class Emotion(str, Enum):
    """Dominant emotional tone of a scene.

    Declaration order is the canonical scan order used to break ties
    between equally scored emotions.
    """

    TENSE = "tense"
    JOYFUL = "joyful"
    MELANCHOLIC = "melancholic"
    ANGRY = "angry"
    FEARFUL = "fearful"
    ROMANTIC = "romantic"
    MYSTERIOUS = "mysterious"
    HUMOROUS = "humorous"
    HOPEFUL = "hopeful"
    DESPERATE = "desperate"
    PEACEFUL = "peaceful"
    CHAOTIC = "chaotic"
    SORROWFUL = "sorrowful"
    TRIUMPHANT = "triumphant"
    NEUTRAL = "neutral"


class TrackedValue(BaseModel, Generic[T]):
    """A value paired with the provenance that produced it."""

    model_config = ConfigDict(frozen=True)

    value: T
    source: MetadataSource = MetadataSource.AUTO

    @classmethod
    def auto(cls, value: T) -> TrackedValue[T]:
        return cls(value=value, source=MetadataSource.AUTO)

    @classmethod
    def manual(cls, value: T) -> TrackedValue[T]:
        return cls(value=value, source=MetadataSource.MANUAL)


class MentionResult(BaseModel):
    """Entity names already detected in a scene, in detection order."""

    model_config = ConfigDict(frozen=True)

    characters: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)
    lore: list[str] = Field(default_factory=list)


class ChapterNoteData(BaseModel):
    """Free-text notes attached to a chapter and its scenes."""

    model_config = ConfigDict(frozen=True)

    chapter_note: str = Field(
        default="", validation_alias=AliasChoices("chapter_note", "chapterNote")
    )
    scene_notes: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("scene_notes", "sceneNotes")
    )


class PlotBoardColumn(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class PlotBoardLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str = ""


class PlotBoardData(BaseModel):
    """Read-only snapshot of the project's plot board."""

    model_config = ConfigDict(frozen=True)

    columns: list[PlotBoardColumn] = Field(default_factory=list)
    # chapter id -> column id -> cell text
    cells: dict[str, dict[str, str]] = Field(default_factory=dict)
    labels: list[PlotBoardLabel] = Field(default_factory=list)
    # chapter id -> hex color
    card_colors: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("card_colors", "cardColors")
    )
    # chapter id -> label ids
    card_labels: dict[str, list[str]] = Field(
        default_factory=dict, validation_alias=AliasChoices("card_labels", "cardLabels")
    )


class SceneMetadataOverrides(BaseModel):
    """Manual values that replace detection for individual fields.

    A field left as None is detected; any other value, including an empty
    string or list, is taken as the user's choice.
    """

    model_config = ConfigDict(frozen=True)

    pov: str | None = None
    emotion: Emotion | None = None
    intensity: int | None = Field(default=None, ge=-10, le=10)
    conflict: str | None = None
    tags: list[str] | None = None


class SceneMetadata(BaseModel):
    """Inferred metadata for one scene, identified by (chapter_id, name)."""

    model_config = ConfigDict(frozen=True)

    name: str
    chapter_id: str
    chapter_path: str = ""

    pov: TrackedValue[str]
    characters: TrackedValue[list[str]]
    locations: TrackedValue[list[str]]
    items: TrackedValue[list[str]]
    lore: TrackedValue[list[str]]
    emotion: TrackedValue[Emotion]
    intensity: TrackedValue[int]
    conflict: TrackedValue[str]
    tags: TrackedValue[list[str]]

    word_count: int = Field(default=0, ge=0)
    dialogue_ratio: float = Field(default=0.0, ge=0.0, le=1.0)
    avg_sentence_length: float = Field(default=0.0, ge=0.0)
    punctuation_intensity: float = Field(default=0.0, ge=0.0)


class ChapterAggregateMetadata(BaseModel):
    """Chapter-level summary folded over its scenes' metadata."""

    model_config = ConfigDict(frozen=True)

    all_characters: list[str] = Field(default_factory=list)
    all_locations: list[str] = Field(default_factory=list)
    dominant_pov: str = ""
    avg_intensity: float = 0.0
    dominant_emotion: Emotion = Emotion.NEUTRAL
    total_word_count: int = 0
    intensity_arc: list[int] = Field(default_factory=list)
