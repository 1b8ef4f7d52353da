"""Config tests consolidated by module."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

import pytest

from workout_recovery.config import (
    STORAGE_FILENAME,
    Config,
    load_config,
    resolve_storage_path,
    validate_config,
)


def test_load_config_defaults_without_file(isolated_app_dir: Path) -> None:
    """No config file anywhere => built-in defaults."""
    cfg = load_config()

    assert cfg == Config()
    assert cfg.storage.id_length == 4
    assert resolve_storage_path(cfg) == isolated_app_dir / STORAGE_FILENAME


def test_load_config_reads_default_file(isolated_app_dir: Path) -> None:
    """config.yaml in the app directory is picked up automatically."""
    isolated_app_dir.mkdir(parents=True)
    (isolated_app_dir / "config.yaml").write_text("storage:\n  id_length: 5\n")

    assert load_config().storage.id_length == 5


def test_load_config_from_yaml(tmp_path: Path) -> None:
    """Explicit YAML files populate every section."""
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "storage:\n"
        "  path: ~/recovery.json\n"
        "  id_length: 6\n"
        "display:\n"
        "  default_count: 10\n"
        "  breakdown: true\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  console_use_rich: false\n"
    )

    cfg = load_config(path)

    assert cfg.storage.id_length == 6
    assert cfg.display.default_count == 10
    assert cfg.display.breakdown is True
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.console_use_rich is False
    assert resolve_storage_path(cfg) == Path("~/recovery.json").expanduser()


def test_load_config_empty_file_is_defaults(tmp_path: Path) -> None:
    """An empty YAML document means defaults."""
    path = tmp_path / "cfg.yaml"
    path.write_text("")

    assert load_config(path) == Config()


def test_load_config_applies_overrides(tmp_path: Path) -> None:
    """Dot-path overrides are cast to the field type."""
    cfg = load_config(
        overrides=[
            "storage.id_length=5",
            "display.default_count=3",
            "display.breakdown=yes",
            f"storage.path={tmp_path / 'x.json'}",
        ]
    )

    assert cfg.storage.id_length == 5
    assert cfg.display.default_count == 3
    assert cfg.display.breakdown is True
    assert cfg.storage.path == str(tmp_path / "x.json")


@pytest.mark.parametrize(
    ("override", "match"),
    [
        ("storage.id_length", "Invalid override"),
        ("storage.nope=1", "Unknown config key"),
        ("nope.id_length=1", "Unknown config key"),
        ("display.breakdown=maybe", "Expected boolean"),
        ("storage.id_length=abc", "invalid literal"),
    ],
)
def test_load_config_rejects_bad_overrides(override: str, match: str) -> None:
    """Malformed overrides fail fast."""
    with pytest.raises(ValueError, match=match):
        load_config(overrides=[override])


@pytest.mark.parametrize(
    ("contents", "match"),
    [
        ("- just\n- a list\n", "mapping at the top level"),
        ("storage: 5\n", "must be a mapping"),
        ("storage:\n  colour: red\n", "Unknown config key"),
        ("extra: {}\n", "Unknown config section"),
        ("storage:\n  path: 123\n", "storage.path must be a non-empty string"),
        ("display:\n  breakdown: 'no'\n", "display.breakdown must be true or false"),
        ("logging:\n  console_use_rich: 'yes'\n", "console_use_rich must be true or false"),
    ],
)
def test_load_config_rejects_bad_files(tmp_path: Path, contents: str, match: str) -> None:
    """Structural problems in the YAML file are reported clearly."""
    path = tmp_path / "cfg.yaml"
    path.write_text(contents)

    with pytest.raises(ValueError, match=match):
        load_config(path)


def test_validation_rejects_invalid_values() -> None:
    """Validation should fail with actionable errors."""
    cases: list[tuple[Callable[[Config], Config], str]] = [
        (lambda cfg: replace(cfg, storage=replace(cfg.storage, id_length=3)), "id_length"),
        (lambda cfg: replace(cfg, storage=replace(cfg.storage, id_length=7)), "id_length"),
        (lambda cfg: replace(cfg, storage=replace(cfg.storage, path="  ")), "storage.path"),
        (
            lambda cfg: replace(cfg, display=replace(cfg.display, default_count=0)),
            "default_count",
        ),
        (lambda cfg: replace(cfg, logging=replace(cfg.logging, level="LOUD")), "logging.level"),
        (lambda cfg: replace(cfg, storage=replace(cfg.storage, path=123)), "storage.path"),
        (
            lambda cfg: replace(cfg, display=replace(cfg.display, breakdown="no")),
            "display.breakdown",
        ),
        (
            lambda cfg: replace(cfg, logging=replace(cfg.logging, console_use_rich=1)),
            "logging.console_use_rich",
        ),
    ]

    for mutate, match in cases:
        with pytest.raises(ValueError, match=match):
            validate_config(mutate(Config()))


def test_to_dict_is_nested() -> None:
    """to_dict mirrors the section layout."""
    data = Config().to_dict()

    assert set(data) == {"storage", "display", "logging"}
    assert data["storage"]["id_length"] == 4


def test_overrides_parse_by_field_type() -> None:
    """Override values follow the field annotation, not YAML guessing."""
    cfg = load_config(
        overrides=["storage.path=123", "display.breakdown=off", "display.default_count=none"]
    )

    assert cfg.storage.path == "123"
    assert cfg.display.breakdown is False
    assert cfg.display.default_count is None


def test_override_key_must_name_a_section_field() -> None:
    """Keys deeper or shallower than section.field are rejected."""
    with pytest.raises(ValueError, match="Invalid override key"):
        load_config(overrides=["storage.path.extra=1"])
    with pytest.raises(ValueError, match="Invalid override key"):
        load_config(overrides=["storage=1"])
