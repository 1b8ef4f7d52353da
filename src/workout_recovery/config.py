# SPDX-License-Identifier: Apache-2.0

"""Configuration for workout-recovery.

Rule #1: **One config system.**
If a knob doesn't live in these dataclasses, it doesn't exist.

We use:
- an optional YAML file (the tool works with no config at all)
- dot-path overrides for one-off changes (`-o storage.id_length=6`)

The loader is strict: mis-typed keys or invalid values fail fast with error
messages that tell you exactly what to fix.

Where things live by default:
- config:  <app dir>/config.yaml
- entries: <app dir>/workout-recovery.json
where <app dir> is the OS-appropriate config directory from click.get_app_dir.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Literal

import click
import yaml

from workout_recovery.ids import DEFAULT_ID_LENGTH

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

APP_NAME = "workout-recovery-data"
CONFIG_FILENAME = "config.yaml"
STORAGE_FILENAME = "workout-recovery.json"

MIN_ID_LENGTH = 4
MAX_ID_LENGTH = 6


@dataclass(frozen=True)
class StorageConfig:
    """Where entries are persisted and how new ids look.

    `path=None` means the default file inside the app directory.
    """

    path: str | None = None
    id_length: int = DEFAULT_ID_LENGTH


@dataclass(frozen=True)
class DisplayConfig:
    """Defaults for the `list` command."""

    # None => show every entry
    default_count: int | None = None
    breakdown: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    """Console logging configuration."""

    level: LogLevel = "WARNING"
    console_use_rich: bool = True


@dataclass(frozen=True)
class Config:
    """Top-level configuration combining all sub-configs."""

    storage: StorageConfig = StorageConfig()
    display: DisplayConfig = DisplayConfig()
    logging: LoggingConfig = LoggingConfig()

    def to_dict(self) -> dict[str, Any]:
        """Convert the entire config tree to a nested dictionary.

        :return dict[str, Any]: Nested dict representation of all config fields.
        """
        return asdict(self)


# ------------------------------ Paths ---------------------------------


def default_app_dir() -> Path:
    """Return the OS-appropriate directory for config and data."""
    return Path(click.get_app_dir(APP_NAME))


def default_config_path() -> Path:
    """Return the path of the optional default config file."""
    return default_app_dir() / CONFIG_FILENAME


def resolve_storage_path(cfg: Config) -> Path:
    """Resolve the entries file for a config.

    :param Config cfg: Loaded configuration.
    :return Path: Explicit storage.path (user-expanded) or the app-dir default.
    """
    if cfg.storage.path is not None:
        return Path(cfg.storage.path).expanduser()
    return default_app_dir() / STORAGE_FILENAME


# ------------------------------ Loading ---------------------------------


_TRUE_WORDS = {"true", "1", "yes", "y", "on"}
_FALSE_WORDS = {"false", "0", "no", "n", "off"}
_NULL_WORDS = {"null", "none", "~"}


def _parse_override_value(field_type: str, raw: str) -> Any:
    """Parse an override string according to the field's annotation.

    Annotations are strings here (postponed evaluation), e.g. ``"int | None"``.

    :param str field_type: Annotation of the target field.
    :param str raw: Value from the command line.
    :raises ValueError: If the value does not parse as the field type.
    :return Any: Parsed value.
    """
    if "None" in field_type and raw.lower() in _NULL_WORDS:
        return None
    if field_type.startswith("bool"):
        if raw.lower() in _TRUE_WORDS:
            return True
        if raw.lower() in _FALSE_WORDS:
            return False
        raise ValueError(f"Expected boolean, got {raw!r}")
    if field_type.startswith("int"):
        return int(raw)
    # str, str | None and Literal-typed fields stay text; validation checks the rest
    return raw


def _apply_override(cfg: Config, key: str, raw_value: str) -> Config:
    """Apply one ``section.field=value`` override, returning a new Config.

    :param Config cfg: Current configuration.
    :param str key: Dotted key, e.g. ``storage.id_length``.
    :param str raw_value: Value to parse for that field.
    :raises ValueError: If the key is malformed or unknown, or the value does not parse.
    :return Config: Config with the field replaced.
    """
    section_name, sep, field_name = key.partition(".")
    if not sep or not section_name or not field_name or "." in field_name:
        raise ValueError(f"Invalid override key {key!r}. Expected section.field")
    if section_name not in {f.name for f in fields(cfg)}:
        raise ValueError(f"Unknown config key: {key!r} (missing {section_name!r})")

    section = getattr(cfg, section_name)
    types = {f.name: str(f.type) for f in fields(section)}
    if field_name not in types:
        raise ValueError(f"Unknown config key: {key!r} (missing {field_name!r})")

    value = _parse_override_value(types[field_name], raw_value)
    return replace(cfg, **{section_name: replace(section, **{field_name: value})})


def _build_section(cls: type, name: str, raw: Any) -> Any:
    """Construct one config section, rejecting unknown keys.

    :param type cls: Section dataclass.
    :param str name: Section name (for error messages).
    :param Any raw: Mapping from YAML (or None).
    :raises ValueError: If raw is not a mapping or has unknown keys.
    :return Any: Section instance.
    """
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ValueError(f"Config section {name!r} must be a mapping, got {type(raw).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config key(s) in {name!r}: {', '.join(unknown)}")
    return cls(**raw)


def _from_nested_dict(data: dict[str, Any]) -> Config:
    """Convert nested dict into Config dataclasses.

    :param dict[str, Any] data: Nested dictionary from YAML parsing.
    :raises ValueError: On unknown sections or keys.
    :return Config: Fully constructed Config.
    """
    sections = {"storage": StorageConfig, "display": DisplayConfig, "logging": LoggingConfig}
    unknown = sorted(set(data) - set(sections))
    if unknown:
        raise ValueError(f"Unknown config section(s): {', '.join(unknown)}")
    built = {name: _build_section(cls, name, data.get(name)) for name, cls in sections.items()}
    return Config(**built)


def load_config(
    path: str | Path | None = None, overrides: Iterable[str] | None = None
) -> Config:
    """Load the YAML config (if any) + apply dot-path overrides.

    With ``path=None`` the default config file is used when it exists;
    otherwise built-in defaults apply.

    :param path: Optional explicit YAML config path.
    :param overrides: Optional dot-path overrides (e.g., ["storage.id_length=6"]).
    :raises ValueError: If the file or an override is invalid.
    :return Config: Validated configuration object.
    """
    if path is None:
        candidate = default_config_path()
        path = candidate if candidate.is_file() else None

    data: Any = {}
    if path is not None:
        with Path(path).open("r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")

    cfg = _from_nested_dict(data)

    if overrides:
        for o in overrides:
            if "=" not in o:
                raise ValueError(
                    f"Invalid override {o!r}. Expected format like storage.id_length=6"
                )
            k, v = o.split("=", 1)
            cfg = _apply_override(cfg, k.strip(), v.strip())

    validate_config(cfg)
    return cfg


# ------------------------------ Validation ---------------------------------


def _vfail(msg: str) -> None:
    """Raise ValueError with a standardized config validation prefix.

    :param str msg: Validation failure message.
    :raises ValueError: Always raised with formatted message.
    """
    raise ValueError(f"Config validation failed: {msg}")


def _validate_storage(cfg: Config) -> None:
    """Validate storage-related config fields."""
    path = cfg.storage.path
    if path is not None and (not isinstance(path, str) or not path.strip()):
        _vfail(f"storage.path must be a non-empty string or null, got {path!r}")
    if not isinstance(cfg.storage.id_length, int) or isinstance(cfg.storage.id_length, bool):
        _vfail(f"storage.id_length must be an integer, got {cfg.storage.id_length!r}")
    if not MIN_ID_LENGTH <= cfg.storage.id_length <= MAX_ID_LENGTH:
        _vfail(
            f"storage.id_length must be in [{MIN_ID_LENGTH}, {MAX_ID_LENGTH}], "
            f"got {cfg.storage.id_length}"
        )


def _validate_display(cfg: Config) -> None:
    """Validate display-related config fields."""
    count = cfg.display.default_count
    if count is not None:
        if not isinstance(count, int) or isinstance(count, bool):
            _vfail(f"display.default_count must be an integer or null, got {count!r}")
        if count <= 0:
            _vfail(f"display.default_count must be positive when set, got {count}")
    if not isinstance(cfg.display.breakdown, bool):
        _vfail(f"display.breakdown must be true or false, got {cfg.display.breakdown!r}")


def _validate_logging(cfg: Config) -> None:
    """Validate logging-related config fields."""
    if cfg.logging.level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        _vfail(
            "logging.level must be one of DEBUG, INFO, WARNING, ERROR, "
            f"got {cfg.logging.level!r}"
        )
    if not isinstance(cfg.logging.console_use_rich, bool):
        _vfail(
            "logging.console_use_rich must be true or false, "
            f"got {cfg.logging.console_use_rich!r}"
        )


def validate_config(cfg: Config) -> None:
    """Validate config with actionable error messages."""
    _validate_storage(cfg)
    _validate_display(cfg)
    _validate_logging(cfg)
