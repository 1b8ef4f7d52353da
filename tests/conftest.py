"""Test session configuration."""

from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from tests.helpers.clock import FakeClock
from workout_recovery import config as config_module
from workout_recovery.cli import cli


@pytest.fixture(autouse=True)
def isolated_app_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default app directory at a temp dir and clear env overrides."""
    app_dir = tmp_path / "app"
    monkeypatch.setattr(config_module, "default_app_dir", lambda: app_dir)
    monkeypatch.delenv("WORKOUT_RECOVERY_CONFIG", raising=False)
    monkeypatch.delenv("WORKOUT_RECOVERY_DATA_FILE", raising=False)
    return app_dir


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path for an entries file that does not exist yet."""
    return tmp_path / "data" / "entries.json"


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at T0."""
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, data_file: Path) -> Callable[..., Result]:
    """Invoke the CLI against the temp data file."""

    def _invoke(*args: str) -> Result:
        return runner.invoke(cli, ["--data-file", str(data_file), *args])

    return _invoke
