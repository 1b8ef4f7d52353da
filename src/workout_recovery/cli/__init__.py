"""CLI entrypoints for workout-recovery.

Invoked via ``pyproject.toml`` entrypoints::

    workout-recovery add "leg day"
    workout-recovery list -n 5
    workout-recovery remove aB3x

Keep these modules thin: argument parsing + calling into library code.
"""

from __future__ import annotations

__all__ = ["cli"]

from workout_recovery.cli.main import cli
