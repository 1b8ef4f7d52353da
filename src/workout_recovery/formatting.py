"""Rendering for the `list` command.

Elapsed time is derived at display time from `now - created_at` and is never
persisted. Entries are shown in store order; nothing here sorts.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from workout_recovery.types import WorkoutEntry

LABEL_WIDTH = 15

_UNITS: tuple[tuple[str, int], ...] = (
    ("day", 86_400),
    ("hour", 3_600),
    ("minute", 60),
    ("second", 1),
)


def _elapsed_seconds(created_at: datetime, now: datetime) -> int:
    """Whole seconds between created_at and now, clamped at zero."""
    delta: timedelta = now - created_at
    return max(0, int(delta.total_seconds()))


def elapsed_parts(created_at: datetime, now: datetime) -> tuple[int, int, int, int]:
    """Split elapsed time into (days, hours, minutes, seconds).

    :param datetime created_at: Entry creation time.
    :param datetime now: Reference time.
    :return tuple[int, int, int, int]: Days plus the remaining hours/minutes/seconds.
    """
    total = _elapsed_seconds(created_at, now)
    days, rem = divmod(total, 86_400)
    hours, rem = divmod(rem, 3_600)
    minutes, seconds = divmod(rem, 60)
    return days, hours, minutes, seconds


def format_elapsed(created_at: datetime, now: datetime) -> str:
    """Elapsed time in the coarsest unit that fits, rounded down.

    >>> from datetime import timezone
    >>> t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> format_elapsed(t0, t0 + timedelta(hours=50))
    '2 days'
    """
    total = _elapsed_seconds(created_at, now)
    name, size = next(((n, s) for n, s in _UNITS if total >= s), _UNITS[-1])
    value = total // size
    return f"{value} {name}" if value == 1 else f"{value} {name}s"


def format_breakdown(created_at: datetime, now: datetime) -> str:
    """Days/hours/minutes breakdown, e.g. ``Days: 1 | Hours: 2 | Minutes: 3``."""
    days, hours, minutes, _ = elapsed_parts(created_at, now)
    return f"Days: {days} | Hours: {hours} | Minutes: {minutes}"


def render_entry(entry: WorkoutEntry, now: datetime, *, breakdown: bool = False) -> str:
    """Render one entry as three right-aligned labelled lines.

    :param WorkoutEntry entry: Entry to render.
    :param datetime now: Reference time for elapsed computation.
    :param bool breakdown: Use the days/hours/minutes breakdown.
    :return str: Multi-line block without a trailing newline.
    """
    if breakdown:
        elapsed = format_breakdown(entry.created_at, now)
    else:
        elapsed = format_elapsed(entry.created_at, now)
    rows = (
        ("[Identifier]", entry.id),
        ("[Description]", entry.description),
        ("[Time Elapsed]", elapsed),
    )
    return "\n".join(f"{label:>{LABEL_WIDTH}} {value}" for label, value in rows)


def render_entries(
    entries: Iterable[WorkoutEntry], now: datetime, *, breakdown: bool = False
) -> str:
    """Render entries in the given order, separated by blank lines."""
    return "\n\n".join(render_entry(e, now, breakdown=breakdown) for e in entries)
