"""Core records and shared error types.

Keep this file small: it defines the **contracts** between subsystems.

- `WorkoutEntry` is what the store holds and the formatter renders.
- The exceptions are what the store raises and the CLI reports.

**On-disk contract**

Each entry is one JSON object:
  id:          short alphanumeric string
  description: free text (may be empty)
  created_at:  ISO-8601 timestamp with a UTC offset
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

DEFAULT_DESCRIPTION = "arbitrary"


class WorkoutRecoveryError(Exception):
    """Base class for errors surfaced to the user."""


class PersistenceError(WorkoutRecoveryError):
    """The storage file is unreadable, unwritable, or malformed."""


class NotFoundError(WorkoutRecoveryError):
    """No entry matches the requested identifier."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(
            f"Identifier {entry_id} was not found. Review identifiers with `list` command."
        )


@dataclass(frozen=True)
class WorkoutEntry:
    """One logged workout session.

    `created_at` is always timezone-aware (UTC). Elapsed time is never stored.
    """

    id: str
    description: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert the entry to its JSON-serializable form.

        :return dict[str, Any]: Mapping with id, description and created_at.
        """
        return {
            "id": self.id,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> WorkoutEntry:
        """Build an entry from a decoded JSON object.

        Naive timestamps are treated as UTC.

        :param Any data: Decoded JSON value for a single entry.
        :raises ValueError: If the value does not have the expected shape.
        :return WorkoutEntry: Parsed entry.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        for key in ("id", "description", "created_at"):
            if key not in data:
                raise ValueError(f"missing field {key!r}")
            if not isinstance(data[key], str):
                raise ValueError(f"field {key!r} must be a string, got {type(data[key]).__name__}")
        if not data["id"]:
            raise ValueError("field 'id' must be non-empty")

        created_at = datetime.fromisoformat(data["created_at"])
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        try:
            created_at = created_at.astimezone(timezone.utc)
        except OverflowError as exc:
            raise ValueError(f"created_at {data['created_at']!r} is out of range in UTC") from exc

        return cls(id=data["id"], description=data["description"], created_at=created_at)
