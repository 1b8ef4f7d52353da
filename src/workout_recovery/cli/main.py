"""Main CLI entry point.

Defines the Click group and shared utilities.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import click

from workout_recovery import __version__
from workout_recovery.config import Config, load_config, resolve_storage_path
from workout_recovery.store import EntryStore
from workout_recovery.types import WorkoutRecoveryError
from workout_recovery.utils.io import setup_python_logging


@dataclass(frozen=True)
class CliState:
    """Global options collected by the root group."""

    config_path: str | None = None
    data_file: str | None = None
    overrides: tuple[str, ...] = ()
    log_level: str | None = None


def resolve_config(state: CliState) -> Config:
    """Load config for a command and apply CLI-level conveniences.

    :param CliState state: Options from the root group.
    :raises click.ClickException: If the config cannot be loaded or is invalid.
    :return Config: Effective configuration.
    """
    try:
        cfg = load_config(state.config_path, overrides=list(state.overrides))
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc

    if state.data_file is not None:
        cfg = replace(cfg, storage=replace(cfg.storage, path=state.data_file))
    if state.log_level is not None:
        cfg = replace(cfg, logging=replace(cfg.logging, level=state.log_level))
    return cfg


def open_store(state: CliState) -> tuple[EntryStore, Config]:
    """Resolve config, configure logging, and load the entry store.

    :param CliState state: Options from the root group.
    :raises click.ClickException: If config or storage cannot be loaded.
    :return tuple[EntryStore, Config]: Loaded store and effective config.
    """
    cfg = resolve_config(state)

    # Logging first so subsequent errors are readable
    setup_python_logging(cfg.logging.level, use_rich=cfg.logging.console_use_rich)

    try:
        store = EntryStore.load(resolve_storage_path(cfg), id_length=cfg.storage.id_length)
    except WorkoutRecoveryError as exc:
        raise click.ClickException(str(exc)) from exc
    return store, cfg


def save_store(store: EntryStore) -> None:
    """Persist the store, reporting failures as CLI errors."""
    try:
        store.save()
    except WorkoutRecoveryError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="workout-recovery")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar="WORKOUT_RECOVERY_CONFIG",
    default=None,
    help="YAML config file (defaults to config.yaml in the app directory, if present).",
)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False),
    envvar="WORKOUT_RECOVERY_DATA_FILE",
    default=None,
    help="Override storage.path (the JSON file holding entries).",
)
@click.option(
    "--override",
    "-o",
    "overrides",
    multiple=True,
    help="Dotpath override, e.g. storage.id_length=6 (repeatable).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override logging.level.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    data_file: str | None,
    overrides: tuple[str, ...],
    log_level: str | None,
) -> None:
    """Track how long it has been since each workout."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(2)

    ctx.obj = CliState(
        config_path=config_path,
        data_file=data_file,
        overrides=overrides,
        log_level=log_level.upper() if log_level else None,
    )


# Import and register subcommands
from workout_recovery.cli.add import add  # noqa: E402

cli.add_command(add)

from workout_recovery.cli.remove import remove  # noqa: E402

cli.add_command(remove)

from workout_recovery.cli.listing import list_sessions  # noqa: E402

cli.add_command(list_sessions)
