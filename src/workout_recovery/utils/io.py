"""Filesystem + logging utilities.

workout-recovery uses deliberately boring IO:
- one JSON file holding every entry
- writes go to a temp file in the same directory, then os.replace() it over
  the target, so a failed write never leaves a truncated file behind
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

_PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _console_handler(level: int, *, use_rich: bool) -> logging.Handler:
    """Build a stderr console handler with optional Rich formatting."""
    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))

    handler.setLevel(level)
    return handler


def setup_python_logging(level: str, *, use_rich: bool = True) -> None:
    """Configure Python logging with a single console handler.

    Logs go to stderr so command output on stdout stays clean.

    :param str level: Log level name (DEBUG, INFO, WARNING, ERROR).
    :param bool use_rich: If True, use Rich for nicer console logs.
    """
    numeric_level = getattr(logging, level, logging.WARNING)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(_console_handler(numeric_level, use_rich=use_rich))


def read_json(path: Path) -> Any:
    """Read and decode a JSON file.

    :param Path path: File to read.
    :raises OSError: If the file cannot be read.
    :raises json.JSONDecodeError: If the contents are not valid JSON.
    :return Any: Decoded JSON value.
    """
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json_atomic(path: Path, payload: Any) -> None:
    """Serialize ``payload`` to ``path`` via write-temp-then-rename.

    The payload is fully encoded before anything touches the filesystem.
    Parent directories are created as needed. An existing file keeps its
    permission bits; a new one is created private to the user.

    :param Path path: Destination file.
    :param Any payload: JSON-serializable value.
    :raises OSError: If the directory or file cannot be written.
    :raises TypeError: If the payload is not JSON-serializable.
    """
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            # mkstemp creates 0600; keep the permissions of the file being replaced
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise
