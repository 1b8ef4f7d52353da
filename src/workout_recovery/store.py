"""JSON-backed entry store.

The store is the only owner of entries for the lifetime of a command:

    store = EntryStore.load(path)   # absent file => empty store
    entry = store.add("bench")      # in-memory only
    store.save()                    # atomic rewrite of the whole file

Every mutation is computed in memory before anything is written, so a failed
save leaves the previous file exactly as it was.
"""

from __future__ import annotations

import json
import logging
import random
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path

from workout_recovery.ids import DEFAULT_ID_LENGTH, generate_id
from workout_recovery.types import NotFoundError, PersistenceError, WorkoutEntry
from workout_recovery.utils.io import read_json, write_json_atomic

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _parse_entries(raw: object, path: Path) -> list[WorkoutEntry]:
    """Validate the decoded file contents and build entries.

    :param object raw: Decoded JSON document.
    :param Path path: Source file (for error messages).
    :raises PersistenceError: If the document has an incompatible shape.
    :return list[WorkoutEntry]: Entries in file order.
    """
    if not isinstance(raw, list):
        raise PersistenceError(
            f"Storage file {path} must contain a JSON array, got {type(raw).__name__}"
        )

    entries: list[WorkoutEntry] = []
    seen: set[str] = set()
    for index, item in enumerate(raw):
        try:
            entry = WorkoutEntry.from_dict(item)
        except ValueError as exc:
            raise PersistenceError(f"Invalid entry #{index} in {path}: {exc}") from exc
        if entry.id in seen:
            raise PersistenceError(f"Duplicate identifier {entry.id!r} in {path}")
        seen.add(entry.id)
        entries.append(entry)
    return entries


class EntryStore:
    """Ordered, id-unique collection of workout entries backed by a JSON file."""

    def __init__(
        self,
        path: str | Path,
        entries: Iterable[WorkoutEntry] = (),
        *,
        id_length: int = DEFAULT_ID_LENGTH,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the store.

        :param path: JSON file the store saves to.
        :param entries: Initial entries, in order. Ids must be distinct.
        :param int id_length: Length of newly generated ids.
        :param clock: Callable returning "now" (aware datetime).
        :param rng: Random source for id generation.
        :raises ValueError: If the initial entries contain duplicate ids.
        """
        self.path = Path(path)
        self.id_length = id_length
        self._clock = clock or utc_now
        self._rng = rng or random.Random()
        self._entries: list[WorkoutEntry] = list(entries)
        if len({e.id for e in self._entries}) != len(self._entries):
            raise ValueError("EntryStore entries must have distinct ids")

    @classmethod
    def load(
        cls,
        path: str | Path,
        *,
        id_length: int = DEFAULT_ID_LENGTH,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> EntryStore:
        """Load a store from ``path``; a missing file is an empty store.

        :param path: JSON file to read.
        :param int id_length: Length of newly generated ids.
        :param clock: Callable returning "now" (aware datetime).
        :param rng: Random source for id generation.
        :raises PersistenceError: If the file exists but is unreadable or malformed.
        :return EntryStore: Loaded store.
        """
        path = Path(path)
        if not path.exists():
            logger.debug("No storage file at %s; starting empty", path)
            return cls(path, id_length=id_length, clock=clock, rng=rng)

        try:
            raw = read_json(path)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Storage file {path} is not valid JSON: {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read storage file {path}: {exc}") from exc

        entries = _parse_entries(raw, path)
        logger.debug("Loaded %d entries from %s", len(entries), path)
        return cls(path, entries, id_length=id_length, clock=clock, rng=rng)

    def save(self) -> None:
        """Write every entry to the storage file, replacing it atomically.

        :raises PersistenceError: If the file cannot be written.
        """
        payload = [entry.to_dict() for entry in self._entries]
        try:
            write_json_atomic(self.path, payload)
        except OSError as exc:
            raise PersistenceError(f"Unable to write storage file {self.path}: {exc}") from exc
        logger.debug("Saved %d entries to %s", len(payload), self.path)

    def add(self, description: str) -> WorkoutEntry:
        """Append a new entry stamped with the current time.

        :param str description: Free-text description (may be empty).
        :return WorkoutEntry: The created entry.
        """
        entry_id = generate_id(self.ids(), self._rng, length=self.id_length)
        entry = WorkoutEntry(id=entry_id, description=description, created_at=self._clock())
        self._entries.append(entry)
        logger.info("Added entry %s (%r)", entry.id, entry.description)
        return entry

    def remove(self, entry_id: str) -> WorkoutEntry:
        """Remove the entry whose id matches exactly.

        :param str entry_id: Identifier to remove.
        :raises NotFoundError: If no entry has that id; the store is unchanged.
        :return WorkoutEntry: The removed entry.
        """
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                del self._entries[index]
                logger.info("Removed entry %s", entry_id)
                return entry
        raise NotFoundError(entry_id)

    def entries(self) -> tuple[WorkoutEntry, ...]:
        """Return every entry in insertion order (read-only view)."""
        return tuple(self._entries)

    def recent(self, count: int | None) -> tuple[WorkoutEntry, ...]:
        """Return the last ``count`` entries, still in insertion order.

        :param count: Number of entries; None means all.
        :raises ValueError: If count is negative.
        :return tuple[WorkoutEntry, ...]: Selected entries.
        """
        if count is None:
            return self.entries()
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if count == 0:
            return ()
        return tuple(self._entries[-count:])

    def ids(self) -> set[str]:
        """Return the set of identifiers currently in use."""
        return {entry.id for entry in self._entries}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return any(entry.id == entry_id for entry in self._entries)
