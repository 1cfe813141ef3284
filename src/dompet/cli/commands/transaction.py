"""Transaction management commands."""

import click
from dompet.cli.error_handling import fail, handle_domain_error
from dompet.cli.parsing import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_cli_date_range,
)
from dompet.domain.entities import TransactionType
from dompet.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--period",
    type=click.Choice(["this-month", "last-month", "this-year", "last-year"]),
    help="Named period instead of explicit dates",
)
@click.option("--type", "txn_type", type=click.Choice([t.value for t in TransactionType]))
@click.option("--category", help="Category name")
@click.option("--link", help="Only transactions linked to this entity (e.g., goal_1)")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    txn_type: str | None,
    category: str | None,
    link: str | None,
):
    """View transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        type=TransactionType(txn_type) if txn_type else None,
        category=category,
        linked_to=link,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>15} {'Category':<22} "
        f"{'Fund source':<16} {'Link':<14} Description"
    )
    click.echo("-" * 110)

    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.type.value:<8} {txn.amount:>15,.2f} "
            f"{txn.category[:22]:<22} {txn.fund_source[:16]:<16} {(txn.linked_to or ''):<14} "
            f"{txn.description[:30]}"
        )

    total_income = sum(t.amount for t in transactions if t.type is TransactionType.INCOME)
    total_expense = sum(t.amount for t in transactions if t.type is TransactionType.EXPENSE)
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<6} Income: {total_income:,.2f} | Expense: {total_expense:,.2f} | "
        f"Count: {len(transactions)}"
    )


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--type", "txn_type", type=click.Choice([t.value for t in TransactionType]))
@click.option("--amount", help="Transaction amount")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today')")
@click.option("--category", help="Category name")
@click.option("--fund-source", help="Fund source name")
@click.option("--description", help="Transaction description")
@click.option("--link", help="Link to a goal, investment, debt or receivable (e.g., goal_1)")
@click.option("--unlink", is_flag=True, help="Remove the link")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    txn_type: str | None,
    amount: str | None,
    date: str | None,
    category: str | None,
    fund_source: str | None,
    description: str | None,
    link: str | None,
    unlink: bool,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Changing the amount, type or
    link of a linked transaction moves its effect to the new values.

    Examples:
        dompet transaction update 1 --amount 75000
        dompet transaction update 1 --link goal_2
        dompet transaction update 1 --unlink --category Belanja
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn_date = parse_date_or_exit(ctx, date) if date is not None else None
    txn_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        txn = transaction_service.update_transaction(
            transaction_id=transaction_id,
            type=TransactionType(txn_type) if txn_type else None,
            amount=txn_amount,
            date=txn_date,
            category=category,
            fund_source=fund_source,
            description=description,
            linked_to=link,
            clear_link=unlink,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")
    click.echo(f"  {txn.date} {txn.type.value} {txn.amount:,.2f} [{txn.category}]")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    A linked transaction's effect on its goal, investment or debt is undone.

    Examples:
        dompet transaction delete 1
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None:
        fail(ctx, f"Transaction {transaction_id} not found")

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
