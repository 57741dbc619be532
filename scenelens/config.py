"""
scenelens.config - YAML config loading and validation.

Handles loading scenelens.yaml from a project directory, merging it over the
built-in defaults and validating all tuning parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from scenelens.exceptions import ConfigError

CONFIG_FILENAME = "scenelens.yaml"


class IntensityWeights(BaseModel):
    """Weights for the five intensity signals."""

    action: float = Field(default=0.30, ge=0.0, le=1.0)
    rhythm: float = Field(default=0.20, ge=0.0, le=1.0)
    punctuation: float = Field(default=0.15, ge=0.0, le=1.0)
    dialogue: float = Field(default=0.15, ge=0.0, le=1.0)
    valence: float = Field(default=0.20, ge=0.0, le=1.0)

    @field_validator("action", "rhythm", "punctuation", "dialogue", "valence")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("Weight must be between 0.0 and 1.0")
        return v


class SceneLensConfig(BaseModel):
    """Resolved configuration for a scenelens project."""

    project_name: str = "untitled"
    locale: str = "en"

    emotion_threshold: int = Field(default=2, ge=0)
    pov_first_person_ratio: float = Field(default=0.015, ge=0.0, le=1.0)
    pov_ambiguity_ratio: float = Field(default=1.3, ge=1.0)
    conflict_max_length: int = Field(default=90, gt=0)
    max_label_length: int = Field(default=40, gt=0)

    intensity_weights: IntensityWeights = Field(default_factory=IntensityWeights)

    # Entity names the CLI scans scenes for.
    characters: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)
    lore: list[str] = Field(default_factory=list)

    config_path: Path | None = None

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("locale must not be empty")
        return v

    @field_validator("characters", "locations", "items", "lore")
    @classmethod
    def strip_names(cls, v: list[str]) -> list[str]:
        return [name.strip() for name in v if name and name.strip()]


DEFAULTS: dict[str, Any] = {
    "locale": "en",
    "emotion_threshold": 2,
    "pov_first_person_ratio": 0.015,
    "pov_ambiguity_ratio": 1.3,
    "conflict_max_length": 90,
    "max_label_length": 40,
    "intensity_weights": {
        "action": 0.30,
        "rhythm": 0.20,
        "punctuation": 0.15,
        "dialogue": 0.15,
        "valence": 0.20,
    },
}


def merge_config(project_config: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Merge project config over defaults. Project config takes precedence."""
    merged = defaults.copy()
    for key, value in project_config.items():
        if key == "intensity_weights" and isinstance(value, dict):
            weights = dict(merged.get("intensity_weights", {}))
            weights.update(value)
            merged["intensity_weights"] = weights
        elif value is not None:
            merged[key] = value
    return merged


def load_config(project_dir: Path) -> SceneLensConfig:
    """Load and validate configuration from a project directory.

    Raises:
        FileNotFoundError: If the directory has no scenelens.yaml
        ConfigError: If the file is not valid YAML or fails validation
    """
    config_file = project_dir / CONFIG_FILENAME
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found in {project_dir}")

    try:
        with open(config_file, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"{config_file} must contain a mapping")

    merged = merge_config(raw_config, DEFAULTS)
    merged["config_path"] = config_file

    try:
        return SceneLensConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e


def create_default_config(project_name: str, locale: str = "en") -> dict[str, Any]:
    """Create a default config for a new project."""
    config = {
        "project_name": project_name,
        "characters": [],
        "locations": [],
        "items": [],
        "lore": [],
    }
    config = merge_config(config, DEFAULTS)
    config["locale"] = locale
    return config


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
