"""Savings advice command."""

import click
from dompet.cli.error_handling import handle_domain_error
from dompet.cli.parsing import resolve_cli_date_range
from dompet.domain.advisor import SavingsAdvisor
from dompet.domain.transaction import TransactionService


@click.command("advise")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--period",
    type=click.Choice(["this-month", "last-month", "this-year", "last-year"]),
    help="Named period instead of explicit dates",
)
@click.pass_context
def advise(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Ask AI for savings tips based on your income and spending.

    Requires OPENAI_API_KEY unless there are no transactions in the range.
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    transactions = TransactionService(ctx.obj["db"]).list_transactions(
        start_date=start, end_date=end
    )
    advisor = ctx.obj.get("savings_advisor") or SavingsAdvisor()
    try:
        advice = advisor.advise(transactions)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(advice)


def register_commands(cli):
    """Register advise command with main CLI."""
    cli.add_command(advise)
