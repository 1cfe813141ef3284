"""Debt and receivable commands."""

import click
from dompet.cli.error_handling import handle_domain_error
from dompet.cli.parsing import parse_amount_or_exit, parse_date_or_exit
from dompet.domain.debt import DebtService
from dompet.domain.entities import DebtStatus, DebtType


@click.group()
def debt_group():
    """Manage debts (money you owe) and receivables (money owed to you)."""
    pass


@debt_group.command("create")
@click.option(
    "--type",
    "debt_type",
    type=click.Choice([t.value for t in DebtType]),
    required=True,
    help="debt: you owe the person; receivable: the person owes you",
)
@click.option("--person", required=True, help="Person name")
@click.option("--amount", required=True, help="Amount borrowed or lent")
@click.option("--due-date", required=True, help="Due date")
@click.option("--description", help="Notes")
@click.pass_context
def create_debt(
    ctx, debt_type: str, person: str, amount: str, due_date: str, description: str | None
):
    """Record a debt or receivable."""
    service = DebtService(ctx.obj["db"])
    try:
        debt_id = service.create_debt(
            type=DebtType(debt_type),
            person_name=person,
            amount=parse_amount_or_exit(ctx, amount),
            due_date=parse_date_or_exit(ctx, due_date, "due date"),
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {debt_type} {debt_id}: {person}")


@debt_group.command("list")
@click.option("--type", "debt_type", type=click.Choice([t.value for t in DebtType]))
@click.option("--status", type=click.Choice([s.value for s in DebtStatus]))
@click.pass_context
def list_debts(ctx, debt_type: str | None, status: str | None):
    """List debts and receivables with outstanding totals."""
    service = DebtService(ctx.obj["db"])
    debts = service.list_debts(
        type=DebtType(debt_type) if debt_type else None,
        status=DebtStatus(status) if status else None,
    )
    if not debts:
        click.echo("No debts found.")
        return

    click.echo(
        f"{'ID':<6} {'Type':<11} {'Person':<20} {'Amount':>15} {'Remaining':>15} {'Status':<7} Due"
    )
    click.echo("-" * 95)
    for debt in debts:
        click.echo(
            f"{debt.id:<6} {debt.type.value:<11} {debt.person_name[:20]:<20} {debt.amount:>15,.2f} "
            f"{debt.current_amount:>15,.2f} {debt.status.value:<7} {debt.due_date}"
        )

    summary = service.summary()
    click.echo("-" * 95)
    click.echo(
        f"Outstanding debt: {summary.total_debt:,.2f} | "
        f"Outstanding receivables: {summary.total_receivable:,.2f}"
    )


@debt_group.command("pay")
@click.argument("debt_id", type=int)
@click.option("--amount", required=True, help="Payment amount")
@click.option("--fund-source", required=True, help="Fund source paying or receiving the money")
@click.option("--date", default="today", show_default=True, help="Payment date")
@click.option("--description", help="Transaction description")
@click.pass_context
def pay(ctx, debt_id: int, amount: str, fund_source: str, date: str, description: str | None):
    """Record a payment on a debt or receivable (creates a linked transaction)."""
    service = DebtService(ctx.obj["db"])
    try:
        transaction_id = service.record_payment(
            debt_id,
            amount=parse_amount_or_exit(ctx, amount),
            date=parse_date_or_exit(ctx, date),
            fund_source=fund_source,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    debt = service.require_debt(debt_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"Remaining: {debt.current_amount:,.2f} ({debt.status.value})")


@debt_group.command("set-status")
@click.argument("debt_id", type=int)
@click.argument("status", type=click.Choice([s.value for s in DebtStatus]))
@click.pass_context
def set_status(ctx, debt_id: int, status: str):
    """Mark a debt or receivable paid or unpaid without recording a transaction."""
    service = DebtService(ctx.obj["db"])
    try:
        debt = service.set_status(debt_id, DebtStatus(status))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Debt record {debt.id} is {debt.status.value} ({debt.current_amount:,.2f} remaining)")


@debt_group.command("delete")
@click.argument("debt_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_debt(ctx, debt_id: int, yes: bool):
    """Delete a debt or receivable. Its transactions are kept."""
    if not yes and not click.confirm(f"Are you sure you want to delete debt record {debt_id}?"):
        click.echo("Deletion cancelled.")
        return
    try:
        DebtService(ctx.obj["db"]).delete_debt(debt_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted debt record {debt_id}")


def register_commands(cli: click.Group) -> None:
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
