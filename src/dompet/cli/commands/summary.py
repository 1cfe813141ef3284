"""Category summary command."""

import click
from dompet.cli.parsing import resolve_cli_date_range
from dompet.domain.summary import SummaryService


@click.command("category-summary")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--period",
    type=click.Choice(["this-month", "last-month", "this-year", "last-year"]),
    help="Named period instead of explicit dates",
)
@click.pass_context
def category_summary(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Show total spending per category, largest first.

    Examples:
        dompet category-summary --period this-month
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    totals = SummaryService(ctx.obj["db"]).expense_by_category(start_date=start, end_date=end)

    click.echo("Pengeluaran per Kategori")
    if not totals:
        click.echo("Tidak ada data pengeluaran untuk ditampilkan.")
        return

    width = max(len("Category"), *(len(t.category) for t in totals))
    click.echo(f"{'Category':<{width}} {'Total':>17}")
    click.echo("-" * (width + 18))
    for item in totals:
        click.echo(f"{item.category:<{width}} {item.total:>17,.2f}")
    click.echo("-" * (width + 18))
    click.echo(f"{'TOTAL':<{width}} {sum(t.total for t in totals):>17,.2f}")


def register_commands(cli):
    """Register category-summary command with main CLI."""
    cli.add_command(category_summary)
