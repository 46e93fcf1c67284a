"""Server management commands."""

import os
import signal
import subprocess
import sys
from pathlib import Path

import httpx
import typer
from rich.console import Console

from nexus.config.loader import ConfigError, load_config

NEXUS_HOME = Path.home() / ".nexus"
PID_FILE = NEXUS_HOME / "server.pid"
LOG_FILE = NEXUS_HOME / "server.log"

console = Console()


def _write_pid(pid: int) -> None:
    PID_FILE.parent.mkdir(parents=True, exist_ok=True)
    PID_FILE.write_text(str(pid))


def _read_pid() -> int | None:
    """Read PID from file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None


def _remove_pid() -> None:
    PID_FILE.unlink(missing_ok=True)


def start_command(config_path: str | None = None, detach: bool = False) -> None:
    """Start the nexus API server.

    Args:
        config_path: Optional path to config file
        detach: Run server in background
    """
    existing_pid = _read_pid()
    if existing_pid:
        console.print(f"[yellow]Server already running (PID {existing_pid})[/yellow]")
        console.print("Run [bold]nexus stop[/bold] first.")
        return

    path = Path(config_path) if config_path else None
    try:
        config = load_config(path)
    except ConfigError as e:
        console.print(f"[red]Failed to load config: {e}[/red]")
        console.print("Run [bold]nexus init[/bold] to create a config file.")
        raise typer.Exit(1) from e

    if detach:
        cmd = [
            sys.executable,
            "-m",
            "uvicorn",
            "nexus.server.asgi:app",
            "--host",
            config.server.host,
            "--port",
            str(config.server.port),
            "--log-level",
            config.logging.level.lower(),
        ]
        env = dict(os.environ)
        if path is not None:
            env["NEXUS_CONFIG"] = str(path.resolve())
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with LOG_FILE.open("a") as log_file:
            proc = subprocess.Popen(
                cmd,
                stdout=log_file,
                stderr=subprocess.STDOUT,
                env=env,
                start_new_session=True,
            )
        _write_pid(proc.pid)
        console.print(f"[green]nexus server started in background (PID {proc.pid})[/green]")
        console.print(f"  http://{config.server.host}:{config.server.port}")
        console.print(f"  Log: {LOG_FILE}")
        console.print("\nRun [bold]nexus stop[/bold] to stop.")
        return

    import uvicorn

    from nexus.log import configure_logging
    from nexus.server.app import create_app

    configure_logging(config)
    app = create_app(config)
    _write_pid(os.getpid())

    console.print(
        f"[green]Starting nexus server on {config.server.host}:{config.server.port}[/green]"
    )
    console.print(f"Model: {config.provider.model} ({config.provider.backend})")
    console.print(f"Database: {config.database.path}")
    console.print("\nPress Ctrl+C to stop")

    try:
        uvicorn.run(
            app,
            host=config.server.host,
            port=config.server.port,
            log_level=config.logging.level.lower(),
        )
    finally:
        _remove_pid()


def stop_command() -> None:
    """Stop the nexus API server."""
    pid = _read_pid()
    if pid is None:
        console.print("[yellow]No running nexus server found.[/yellow]")
        return

    try:
        os.kill(pid, signal.SIGTERM)
        console.print(f"[green]Stopped nexus server (PID {pid})[/green]")
    except ProcessLookupError:
        console.print("[yellow]Server process already exited.[/yellow]")
    finally:
        _remove_pid()


def status_command(config_path: str | None = None) -> None:
    """Report whether the server answers its health check."""
    pid = _read_pid()

    try:
        config = load_config(Path(config_path) if config_path else None)
        host, port = config.server.host, config.server.port
    except ConfigError:
        host, port = "127.0.0.1", 3000

    try:
        resp = httpx.get(f"http://{host}:{port}/health", timeout=3.0)
        data = resp.json()
    except (httpx.HTTPError, ValueError):
        if pid:
            console.print(f"[yellow]PID {pid} exists but health check failed.[/yellow]")
        else:
            console.print("[yellow]Server is not running.[/yellow]")
            console.print("Start with: [bold]nexus start[/bold]")
        return

    console.print("[green]Server is running[/green]")
    if pid:
        console.print(f"  PID:     {pid}")
    console.print(f"  URL:     http://{host}:{port}")
    console.print(f"  Model:   {data.get('model', 'unknown')}")
    console.print(f"  Version: {data.get('version', 'unknown')}")
