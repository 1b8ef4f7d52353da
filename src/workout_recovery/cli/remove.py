"""Remove subcommand."""

from __future__ import annotations

import click

from workout_recovery.cli.main import CliState, open_store, save_store
from workout_recovery.types import NotFoundError


@click.command()
@click.argument("identifier")
@click.pass_obj
def remove(state: CliState, identifier: str) -> None:
    """Remove a previous workout session.

    IDENTIFIER is the id shown by `list`.
    """
    store, _cfg = open_store(state)

    try:
        store.remove(identifier)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    save_store(store)

    click.echo(f"Removed workout session {identifier}")
