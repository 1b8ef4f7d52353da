"""List subcommand.

Read-only: never writes the storage file.
"""

from __future__ import annotations

import click

from workout_recovery.cli.main import CliState, open_store
from workout_recovery.formatting import render_entries
from workout_recovery.store import utc_now


@click.command(name="list")
@click.option(
    "--number",
    "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Only show the N most recent sessions (default: display.default_count, or all).",
)
@click.option(
    "--breakdown/--no-breakdown",
    default=None,
    help="Show elapsed time as days/hours/minutes instead of the coarsest unit.",
)
@click.pass_obj
def list_sessions(state: CliState, number: int | None, breakdown: bool | None) -> None:
    """List recorded workout sessions in order, with time elapsed."""
    store, cfg = open_store(state)

    count = number if number is not None else cfg.display.default_count
    use_breakdown = cfg.display.breakdown if breakdown is None else breakdown

    entries = store.recent(count)
    if not entries:
        click.echo("No workout sessions recorded.")
        return

    click.echo(render_entries(entries, utc_now(), breakdown=use_breakdown))
