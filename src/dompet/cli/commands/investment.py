"""Investment commands."""

import click
from dompet.cli.error_handling import handle_domain_error
from dompet.cli.parsing import parse_amount_or_exit, parse_date_or_exit
from dompet.domain.investment import InvestmentService


@click.group()
def investment_group():
    """Manage investments."""
    pass


@investment_group.command("create")
@click.option("--name", required=True, help="Investment name")
@click.option("--type", "inv_type", required=True, help="Instrument type (e.g., Saham, Reksa Dana)")
@click.option("--amount", required=True, help="Initial amount invested")
@click.option("--current-value", help="Current market value (defaults to the initial amount)")
@click.option("--purchase-date", default="today", show_default=True, help="Purchase date")
@click.option(
    "--fund-source",
    help="Pay the initial amount from this fund source (records a linked expense)",
)
@click.pass_context
def create_investment(
    ctx,
    name: str,
    inv_type: str,
    amount: str,
    current_value: str | None,
    purchase_date: str,
    fund_source: str | None,
):
    """Create an investment."""
    service = InvestmentService(ctx.obj["db"])
    try:
        investment_id = service.create_investment(
            name=name,
            type=inv_type,
            purchase_date=parse_date_or_exit(ctx, purchase_date, "purchase date"),
            initial_amount=parse_amount_or_exit(ctx, amount),
            current_value=(
                parse_amount_or_exit(ctx, current_value) if current_value is not None else None
            ),
            fund_source=fund_source,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created investment {investment_id}: {name} (link as investment_{investment_id})")


@investment_group.command("list")
@click.pass_context
def list_investments(ctx):
    """List investments with profit/loss and portfolio totals."""
    service = InvestmentService(ctx.obj["db"])
    investments = service.list_investments()
    if not investments:
        click.echo("No investments found.")
        return

    click.echo(f"{'ID':<6} {'Name':<22} {'Type':<12} {'Initial':>15} {'Current':>15} {'P/L':>15}")
    click.echo("-" * 90)
    for inv in investments:
        click.echo(
            f"{inv.id:<6} {inv.name[:22]:<22} {inv.type[:12]:<12} {inv.initial_amount:>15,.2f} "
            f"{inv.current_value:>15,.2f} {inv.profit_loss:>15,.2f}"
        )

    summary = service.portfolio_summary()
    click.echo("-" * 90)
    click.echo(
        f"{'TOTAL':<42} {summary.total_initial:>15,.2f} {summary.total_current:>15,.2f} "
        f"{summary.profit_loss:>15,.2f} ({summary.profit_loss_percentage:.2f}%)"
    )


@investment_group.command("update-value")
@click.argument("investment_id", type=int)
@click.option("--value", required=True, help="Current market value")
@click.pass_context
def update_value(ctx, investment_id: int, value: str):
    """Record the current market value of an investment."""
    service = InvestmentService(ctx.obj["db"])
    try:
        inv = service.update_value(investment_id, current_value=parse_amount_or_exit(ctx, value))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Investment {inv.id} valued at {inv.current_value:,.2f} (P/L {inv.profit_loss:,.2f})")


@investment_group.command("liquidate")
@click.argument("investment_id", type=int)
@click.option("--fund-source", required=True, help="Fund source receiving the proceeds")
@click.option("--amount", help="Proceeds of a partial sale (defaults to the full current value)")
@click.option("--date", default="today", show_default=True, help="Sale date")
@click.pass_context
def liquidate(ctx, investment_id: int, fund_source: str, amount: str | None, date: str):
    """Sell all or part of an investment (records a linked income)."""
    service = InvestmentService(ctx.obj["db"])
    try:
        transaction_id = service.liquidate(
            investment_id,
            date=parse_date_or_exit(ctx, date),
            fund_source=fund_source,
            amount=parse_amount_or_exit(ctx, amount) if amount is not None else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    inv = service.require_investment(investment_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(
        f"Investment {inv.id} remaining: initial {inv.initial_amount:,.2f}, "
        f"current {inv.current_value:,.2f}"
    )


@investment_group.command("delete")
@click.argument("investment_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_investment(ctx, investment_id: int, yes: bool):
    """Delete an investment. Its transactions are kept."""
    if not yes and not click.confirm(
        f"Are you sure you want to delete investment {investment_id}?"
    ):
        click.echo("Deletion cancelled.")
        return
    try:
        InvestmentService(ctx.obj["db"]).delete_investment(investment_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted investment {investment_id}")


def register_commands(cli: click.Group) -> None:
    """Register investment commands with main CLI."""
    cli.add_command(investment_group, name="investment")
