"""
scenelens.cli - Typer CLI entry point.

A thin caller of the analysis API: splits a chapter file into scenes, builds
mentions from the configured entity names, analyses every scene and prints
the results with the chapter aggregate.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scenelens import __version__
from scenelens.chapter import compute_chapter_aggregate, split_scenes
from scenelens.config import (
    CONFIG_FILENAME,
    SceneLensConfig,
    create_default_config,
    load_config,
    write_config,
)
from scenelens.exceptions import ChapterError, ConfigError, LexiconError
from scenelens.io import read_structured, read_text, write_json
from scenelens.logging import configure_logging
from scenelens.mentions import build_mentions
from scenelens.models import (
    ChapterNoteData,
    Emotion,
    PlotBoardData,
    SceneMetadata,
    SceneMetadataOverrides,
)
from scenelens.scene import analyse_scene
from scenelens.utils import format_percent, get_intensity_class

app = typer.Typer(
    name="scenelens",
    help="Heuristic scene metadata for long-form fiction.\n\n"
    "Infers point of view, emotion, intensity, conflict and plotline tags "
    "for every scene of a chapter without calling a language model.",
    add_completion=False,
)
console = Console()

INTENSITY_STYLES = {
    "high": "bold red",
    "medium": "yellow",
    "low": "green",
    "calm": "cyan",
}


def find_project_dir() -> Path | None:
    """Find the project directory by looking for scenelens.yaml."""
    current = Path.cwd()
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists():
            return current
        current = current.parent
    return None


def resolve_config() -> SceneLensConfig:
    project_dir = find_project_dir()
    if not project_dir:
        return SceneLensConfig()
    try:
        return load_config(project_dir)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def load_chapter(path: Path) -> str:
    if not path.is_file():
        raise ChapterError(f"Chapter file not found: {path}")
    try:
        return read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ChapterError(f"Cannot read chapter {path}: {e}") from e


def load_mapping(path: Path) -> dict[str, Any]:
    data = read_structured(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return data


def load_overrides(path: Path) -> dict[str, SceneMetadataOverrides]:
    """Read per-scene overrides: a mapping of scene name to field values."""
    overrides = {}
    for name, fields in load_mapping(path).items():
        fields = fields or {}
        if not isinstance(fields, dict):
            raise ValueError(f"{path}: overrides for scene '{name}' must be a mapping")
        overrides[name] = SceneMetadataOverrides(**fields)
    return overrides


def serialize_results(
    chapter_id: str,
    chapter_path: str,
    scenes: dict[str, SceneMetadata],
) -> dict[str, Any]:
    aggregate = compute_chapter_aggregate(scenes)
    return {
        "chapter_id": chapter_id,
        "chapter_path": chapter_path,
        "scenes": {name: scene.model_dump(mode="json") for name, scene in scenes.items()},
        "aggregate": aggregate.model_dump(mode="json"),
    }


def version_callback(value: bool) -> None:
    if value:
        console.print(f"scenelens {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """scenelens - heuristic scene metadata for long-form fiction."""
    configure_logging(verbose)


@app.command("init")
def init_project(
    name: str = typer.Argument(..., help="Project name"),
    locale: str = typer.Option("en", "--locale", "-l", help="Manuscript language code"),
    path: str = typer.Option(".", "--path", "-d", help="Directory to write the config into"),
) -> None:
    """Create a scenelens.yaml with default settings."""
    config_path = Path(path) / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[red]Error: '{config_path}' already exists[/red]")
        raise typer.Exit(1)

    write_config(create_default_config(name, locale), config_path)
    console.print(f"[green]✓[/green] Created {CONFIG_FILENAME} for '{name}' ({locale})")
    console.print("[dim]  List your characters and locations in it, then run:[/dim]")
    console.print("  scenelens analyse <chapter.md>")


@app.command("analyse")
def analyse_chapter(
    chapter: str = typer.Argument(..., help="Chapter markdown file"),
    chapter_id: str | None = typer.Option(
        None, "--chapter-id", help="Stable chapter id (defaults to the file name)"
    ),
    locale: str | None = typer.Option(
        None, "--locale", "-l", help="Language code (defaults to the project locale)"
    ),
    characters: list[str] = typer.Option(
        [], "--character", "-c", help="Character name to look for (repeatable)"
    ),
    notes: str | None = typer.Option(None, "--notes", help="Chapter notes (YAML or JSON)"),
    plot_board: str | None = typer.Option(
        None, "--plot-board", help="Plot board data (YAML or JSON)"
    ),
    overrides: str | None = typer.Option(
        None, "--overrides", help="Manual per-scene values (YAML or JSON)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Write results as JSON"),
    details: bool = typer.Option(False, "--details", help="Show intensity signal breakdown"),
) -> None:
    """Analyse every scene of a chapter."""
    config = resolve_config()
    chapter_path = Path(chapter)

    try:
        body = load_chapter(chapter_path)
    except ChapterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    scene_texts = split_scenes(body) or {chapter_path.stem: body}
    chapter_id = chapter_id or chapter_path.stem
    locale = locale or config.locale
    known_characters = list(dict.fromkeys([*characters, *config.characters]))

    try:
        chapter_notes = ChapterNoteData(**load_mapping(Path(notes))) if notes else None
        board = PlotBoardData(**load_mapping(Path(plot_board))) if plot_board else None
        scene_overrides = load_overrides(Path(overrides)) if overrides else {}
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        console.print(f"[red]Error reading inputs: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        scenes: dict[str, SceneMetadata] = {}
        for name, text in scene_texts.items():
            mentions = build_mentions(
                text,
                characters=known_characters,
                locations=config.locations,
                items=config.items,
                lore=config.lore,
            )
            scenes[name] = analyse_scene(
                text,
                name,
                chapter_id,
                str(chapter_path),
                mentions,
                chapter_notes=chapter_notes,
                plot_board=board,
                overrides=scene_overrides.get(name),
                locale=locale,
                config=config,
            )
    except LexiconError as e:
        console.print(f"[red]Error loading lexicon: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    print_scenes(scenes)
    if details:
        print_intensity_details(scene_texts, scenes, locale, config)
    print_aggregate(scenes)

    if output:
        write_json(Path(output), serialize_results(chapter_id, str(chapter_path), scenes))
        console.print(f"\n[green]✓[/green] Wrote {output}")


@app.command("lexicon")
def show_lexicon(
    locale: str = typer.Argument("en", help="Language code to resolve"),
) -> None:
    """Show the lexicon a locale resolves to."""
    from scenelens.lexicon import select_lexicon

    try:
        lexicon = select_lexicon(locale)
    except LexiconError as e:
        console.print(f"[red]Error loading lexicon: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Lexicon '{lexicon.name}' v{lexicon.version} for locale '{locale}'")
    table.add_column("Emotion", style="cyan")
    table.add_column("Keywords", style="green", justify="right")
    table.add_column("Total weight", style="yellow", justify="right")

    for emotion in Emotion:
        pairs = lexicon.keywords(emotion)
        if not pairs:
            continue
        table.add_row(emotion.value, str(len(pairs)), str(sum(w for _, w in pairs)))

    console.print(table)
    console.print(f"[dim]{len(lexicon.action_verbs)} action verbs[/dim]")


def print_scenes(scenes: dict[str, SceneMetadata]) -> None:
    table = Table(title="Scenes")
    table.add_column("Scene", style="cyan")
    table.add_column("Words", justify="right")
    table.add_column("Dialogue", justify="right")
    table.add_column("POV")
    table.add_column("Emotion")
    table.add_column("Intensity", justify="right")
    table.add_column("Conflict")
    table.add_column("Tags")

    for name, scene in scenes.items():
        intensity = scene.intensity.value
        style = INTENSITY_STYLES[get_intensity_class(intensity)]
        table.add_row(
            escape(name),
            str(scene.word_count),
            format_percent(scene.dialogue_ratio),
            _mark_manual(escape(scene.pov.value) or "-", scene.pov.source.value),
            _mark_manual(scene.emotion.value.value, scene.emotion.source.value),
            f"[{style}]{intensity:+d}[/{style}]",
            escape(scene.conflict.value) or "[dim]-[/dim]",
            escape(", ".join(scene.tags.value)) or "[dim]-[/dim]",
        )

    console.print(table)


def print_intensity_details(
    scene_texts: dict[str, str],
    scenes: dict[str, SceneMetadata],
    locale: str,
    config: SceneLensConfig,
) -> None:
    from scenelens.analyze.intensity import score_intensity_components

    table = Table(title="Intensity signals")
    table.add_column("Scene", style="cyan")
    for signal in ("action", "rhythm", "punctuation", "dialogue", "valence"):
        table.add_column(signal.capitalize(), justify="right")

    for name, text in scene_texts.items():
        components = score_intensity_components(
            text, scenes[name].emotion.value, locale, config.intensity_weights
        )
        table.add_row(escape(name), *(f"{v:.2f}" for v in components.values()))

    console.print(table)


def print_aggregate(scenes: dict[str, SceneMetadata]) -> None:
    aggregate = compute_chapter_aggregate(scenes)
    arc = " → ".join(f"{v:+d}" for v in aggregate.intensity_arc) or "-"

    console.print(f"\n[bold]Chapter[/bold]: {aggregate.total_word_count} words")
    console.print(f"  POV: {aggregate.dominant_pov or '-'}")
    console.print(f"  Emotion: {aggregate.dominant_emotion.value}")
    console.print(f"  Avg intensity: {aggregate.avg_intensity:+.1f}  arc {arc}")
    if aggregate.all_characters:
        console.print(f"  Characters: {', '.join(aggregate.all_characters)}")
    if aggregate.all_locations:
        console.print(f"  Locations: {', '.join(aggregate.all_locations)}")


def _mark_manual(value: str, source: str) -> str:
    return f"{value} [dim](manual)[/dim]" if source == "manual" else value


if __name__ == "__main__":
    app()
