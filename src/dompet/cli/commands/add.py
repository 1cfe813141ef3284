"""Add transaction command."""

import click
from dompet.cli.error_handling import handle_domain_error
from dompet.cli.parsing import parse_amount_or_exit, parse_date_or_exit
from dompet.domain.entities import TransactionType
from dompet.domain.transaction import TransactionService


@click.command("add")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    required=True,
    help="Transaction type",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 150000 or Rp150.000)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'kemarin')",
)
@click.option("--category", required=True, help="Category name")
@click.option("--fund-source", required=True, help="Fund source name")
@click.option("--description", required=True, help="Transaction description")
@click.option("--link", help="Link to a goal, investment, debt or receivable (e.g., goal_1)")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    date: str,
    category: str,
    fund_source: str,
    description: str,
    link: str | None,
):
    """Add a transaction.

    Linked transactions update their goal, investment or debt and get the
    category that belongs to the link.

    Examples:
        dompet add --type expense --amount 50000 --category Transportasi --fund-source Tunai --description Ojek
        dompet add --type expense --amount 1000000 --category Investasi --fund-source "Rekening Bank" --description "Top up" --link investment_1
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn_date = parse_date_or_exit(ctx, date)
    txn_amount = parse_amount_or_exit(ctx, amount)

    try:
        transaction_id = transaction_service.create_transaction(
            type=TransactionType(txn_type),
            amount=txn_amount,
            date=txn_date,
            category=category,
            fund_source=fund_source,
            description=description,
            linked_to=link,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.require_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {txn.amount:,.2f}")
    click.echo(f"  Category: {txn.category}")
    if txn.linked_to:
        click.echo(f"  Linked to: {txn.linked_to}")
    elif link:
        click.echo(f"  Warning: {link} no longer exists; saved as an ordinary transaction")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
