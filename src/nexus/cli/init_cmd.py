"""Initialize command - write a starter nexus.yaml."""

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from nexus.config.loader import DEFAULT_CONFIG_PATH, save_config
from nexus.config.schema import NexusConfig

console = Console()


def init_command(
    config_path: str | None = None,
    force: bool = False,
    model: str | None = None,
    non_interactive: bool = False,
) -> None:
    """Write a default configuration file.

    Args:
        config_path: Destination (defaults to ~/.nexus/nexus.yaml)
        force: Overwrite an existing file without asking
        model: Primary model name to record
        non_interactive: Never prompt; refuse to overwrite unless ``force``
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists() and not force:
        if non_interactive or not Confirm.ask(f"{path} exists. Overwrite?", default=False):
            console.print(f"[yellow]Config already exists at {path}[/yellow]")
            console.print("Use [bold]--force[/bold] to overwrite.")
            raise typer.Exit(1)

    config = NexusConfig()
    if model:
        config.provider.model = model

    save_config(config, path)

    key_env = config.provider.api_key_env
    key_status = (
        "[green]found[/green]" if os.environ.get(key_env) else "[yellow]not set[/yellow]"
    )
    console.print(
        Panel.fit(
            f"Config written to [bold]{path}[/bold]\n"
            f"Model: {config.provider.model} (fallback {config.provider.fallback_model})\n"
            f"API key ({key_env}): {key_status}\n"
            f"Database: {config.database.path}",
            title="nexus init",
        )
    )
    console.print("\nNext: [bold]nexus seed[/bold] then [bold]nexus start[/bold]")
