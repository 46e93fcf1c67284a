"""Main CLI application using Typer."""

import sys

import typer
from rich.console import Console

from nexus import __version__

app = typer.Typer(
    name="nexus",
    help="Nexus - mental-wellness companion API server",
    no_args_is_help=True,
)

console = Console()


@app.command()
def version():
    """Show nexus version."""
    console.print(f"nexus version {__version__}")


@app.command()
def init(
    config_path: str = typer.Option(None, "--config", "-c", help="Where to write the config"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    non_interactive: bool = typer.Option(
        False, "--non-interactive", "-y", help="Never prompt"
    ),
    model: str = typer.Option(None, "--model", "-m", help="Primary model name"),
):
    """Write a default nexus configuration."""
    from nexus.cli.init_cmd import init_command

    init_command(config_path=config_path, force=force, model=model, non_interactive=non_interactive)


@app.command()
def start(
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/.nexus/nexus.yaml)",
    ),
    detach: bool = typer.Option(False, "--detach", "-d", help="Run server in background"),
):
    """Start the nexus API server."""
    from nexus.cli.server_cmd import start_command

    start_command(config_path=config_path, detach=detach)


@app.command()
def stop():
    """Stop the nexus API server."""
    from nexus.cli.server_cmd import stop_command

    stop_command()


@app.command()
def status(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Check nexus server status."""
    from nexus.cli.server_cmd import status_command

    status_command(config_path=config_path)


@app.command()
def seed(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
    force: bool = typer.Option(False, "--force", "-f", help="Insert even if exercises exist"),
):
    """Load the bundled guided exercises into the database."""
    from nexus.cli.seed_cmd import seed_command

    seed_command(config_path=config_path, force=force)


def main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
