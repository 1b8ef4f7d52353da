"""workout-recovery: track how long it has been since each workout.

This package is intentionally small.

Layout:
- types: WorkoutEntry + error hierarchy
- ids: short identifier generation
- store: JSON-backed entry store
- formatting: elapsed-time rendering for `list`
- config + utils.io: YAML config, logging, atomic writes
- cli: Click entrypoints
"""

from __future__ import annotations

try:
    from workout_recovery._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"

__all__ = ["__version__"]
