"""
scenelens.io - Input and result file helpers.

The CLI reads chapters, notes, plot boards and overrides through these
functions and writes analysis results with write_json, which never leaves a
half-written result file behind.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

import yaml


def read_json(path: Path) -> dict[str, Any]:
    """Load a UTF-8 JSON document.

    Raises:
        FileNotFoundError: If the path does not exist
        json.JSONDecodeError: If the content is not JSON
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def read_structured(path: Path) -> dict[str, Any]:
    """Load notes, plot-board or override data from JSON or YAML.

    Files ending in .json are parsed as JSON; anything else goes through
    yaml.safe_load, which also accepts plain JSON. An empty YAML document
    reads as an empty mapping.

    Args:
        path: Input file

    Returns:
        Parsed top-level value
    """
    if path.suffix.lower() == ".json":
        return read_json(path)
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def write_json(path: Path, data: dict[str, Any], indent: int = 2) -> None:
    """Persist analysis results as pretty-printed UTF-8 JSON.

    The payload is dumped into a sibling temp file that replaces the target
    only once the dump succeeded.

    Args:
        path: Result file; parent directories are created
        data: JSON-serialisable mapping
        indent: Indent width
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
    ) as handle:
        staged = Path(handle.name)
        try:
            json.dump(data, handle, indent=indent, ensure_ascii=False)
        except Exception:
            staged.unlink(missing_ok=True)
            raise
    staged.replace(path)


def read_text(path: Path) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()
