"""Main CLI entry point."""

import click
from dompet.database.factories import create_sqlite_database
from dompet.logging_setup import configure_logging

# Import and register all commands at module level
from dompet.cli.commands import (
    init_data,
    add,
    transaction,
    goal,
    investment,
    debt,
    category,
    cash_flow,
    summary,
    advise,
    scan,
    backup,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DOMPET_DB_PATH environment variable)",
    envvar="DOMPET_DB_PATH",
)
@click.option(
    "--log-level",
    help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to DOMPET_LOG_LEVEL or WARNING",
    envvar="DOMPET_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Dompet - personal finance tracker.

    Record income and expenses, and keep savings goals, investments and
    debts in step with the transactions linked to them.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
init_data.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
goal.register_commands(cli)
investment.register_commands(cli)
debt.register_commands(cli)
category.register_commands(cli)
cash_flow.register_commands(cli)
summary.register_commands(cli)
advise.register_commands(cli)
scan.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
