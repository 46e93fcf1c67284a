"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest


@pytest.fixture
def tmp_config_path(tmp_path: Path) -> Path:
    """Provide a temporary config file path."""
    return tmp_path / "nexus.yaml"


@pytest.fixture
def pid_file(tmp_path: Path, monkeypatch) -> Path:
    """Redirect the server PID file into a temp directory."""
    path = tmp_path / "server.pid"
    monkeypatch.setattr("nexus.cli.server_cmd.PID_FILE", path)
    return path
