"""Seed command - load the bundled guided exercises."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from nexus.config.loader import ConfigError, load_config
from nexus.storage import Database, ExerciseRepository
from nexus.storage.seed import DEFAULT_EXERCISES

console = Console()


def seed_command(config_path: str | None = None, force: bool = False) -> None:
    """Insert the bundled exercises into the configured database.

    Args:
        config_path: Optional path to config file
        force: Insert even when exercises already exist
    """
    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        console.print(f"[red]Failed to load config: {e}[/red]")
        raise typer.Exit(1) from e

    db = Database(config.database.path)
    repo = ExerciseRepository(db)

    existing = repo.count()
    if existing and not force:
        console.print(
            f"[yellow]{existing} exercises already present; use --force to add anyway.[/yellow]"
        )
        return

    inserted = repo.seed(DEFAULT_EXERCISES)

    table = Table(title=f"Seeded {inserted} exercises")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Difficulty")
    table.add_column("Minutes", justify="right")
    for exercise in DEFAULT_EXERCISES:
        table.add_row(
            exercise.title, exercise.category, str(exercise.difficulty), str(exercise.duration)
        )
    console.print(table)
