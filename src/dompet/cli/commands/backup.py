"""Backup command."""

from pathlib import Path

import click
from dompet.cli.error_handling import handle_domain_error
from dompet.domain.backup import BackupService, JSONFileSink


@click.command("backup")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def backup(ctx, path: Path):
    """Write a JSON snapshot of all data to PATH, replacing any previous backup."""
    try:
        snapshot = BackupService(ctx.obj["db"]).export(JSONFileSink(path))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Backed up {len(snapshot['transactions'])} transaction(s), {len(snapshot['goals'])} goal(s), "
        f"{len(snapshot['investments'])} investment(s) and {len(snapshot['debts'])} debt record(s) "
        f"to {path}"
    )


def register_commands(cli):
    """Register backup command with main CLI."""
    cli.add_command(backup)
