"""Cash-flow report command."""

import click
from dompet.cli.parsing import resolve_cli_date_range
from dompet.domain.cash_flow import CashFlowService


@click.command("cash-flow")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--period",
    type=click.Choice(["this-month", "last-month", "this-year", "last-year"]),
    help="Named period instead of explicit dates",
)
@click.pass_context
def cash_flow(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Show monthly income, expense and net cash flow.

    Money moved into investments is not counted as spending; selling an
    investment counts only the realized profit (as income) or loss (as expense).
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    report = CashFlowService(ctx.obj["db"]).build_report(start_date=start, end_date=end)

    if not report.months:
        click.echo("No transactions found.")
        return

    click.echo(f"{'Month':<9} {'Income':>17} {'Expense':>17} {'Net':>17}")
    click.echo("-" * 63)
    for month in report.months:
        click.echo(
            f"{month.month:<9} {month.income:>17,.2f} {month.expense:>17,.2f} {month.net:>17,.2f}"
        )
    click.echo("-" * 63)
    click.echo(
        f"{'TOTAL':<9} {report.total_income:>17,.2f} {report.total_expense:>17,.2f} "
        f"{report.net_flow:>17,.2f}"
    )


def register_commands(cli):
    """Register cash-flow command with main CLI."""
    cli.add_command(cash_flow)
