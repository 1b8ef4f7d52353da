"""Add subcommand."""

from __future__ import annotations

import click

from workout_recovery.cli.main import CliState, open_store, save_store
from workout_recovery.types import DEFAULT_DESCRIPTION


@click.command()
@click.argument("description", required=False, default=None)
@click.pass_obj
def add(state: CliState, description: str | None) -> None:
    """Add a new workout session.

    DESCRIPTION is a short note about the session (default: "arbitrary").
    """
    store, _cfg = open_store(state)

    entry = store.add(DEFAULT_DESCRIPTION if description is None else description)
    save_store(store)

    click.echo(f"Added workout session {entry.id} ({entry.description})")
