"""Receipt scanning command."""

import mimetypes
from pathlib import Path

import click
from dompet.cli.error_handling import fail, handle_domain_error
from dompet.domain.category import CategoryService
from dompet.domain.entities import TransactionType
from dompet.domain.fund_source import FundSourceService
from dompet.domain.receipt import ReceiptExtractor
from dompet.domain.transaction import TransactionService


@click.command("scan")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--save", is_flag=True, help="Record the extracted transaction")
@click.option("--fund-source", help="Fund source to use when none is visible on the receipt")
@click.pass_context
def scan(ctx, image: Path, save: bool, fund_source: str | None):
    """Read a receipt, invoice or salary slip photo with AI.

    Prints the extracted transaction. Nothing is recorded unless --save is given.
    Requires OPENAI_API_KEY.
    """
    db = ctx.obj["db"]
    category_service = CategoryService(db)
    extractor = ctx.obj.get("receipt_extractor") or ReceiptExtractor()

    mime_type = mimetypes.guess_type(image.name)[0] or "image/jpeg"
    try:
        guess = extractor.extract(
            image.read_bytes(),
            mime_type,
            income_categories=category_service.category_names(TransactionType.INCOME),
            expense_categories=category_service.category_names(TransactionType.EXPENSE),
            fund_sources=[f.name for f in FundSourceService(db).list_fund_sources()],
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("Extracted transaction:")
    click.echo(f"  Type: {guess.type.value}")
    click.echo(f"  Amount: {guess.amount:,.2f}")
    click.echo(f"  Date: {guess.date}")
    click.echo(f"  Category: {guess.category}")
    click.echo(f"  Description: {guess.description}")
    click.echo(f"  Fund source: {guess.source or '-'}")

    if not save:
        return

    source = guess.source or fund_source
    if not source:
        fail(ctx, "No fund source on the receipt; pass --fund-source")

    try:
        transaction_id = TransactionService(db).create_transaction(
            type=guess.type,
            amount=guess.amount,
            date=guess.date,
            category=guess.category,
            fund_source=source,
            description=guess.description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {transaction_id}")


def register_commands(cli):
    """Register scan command with main CLI."""
    cli.add_command(scan)
