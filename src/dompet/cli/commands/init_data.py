"""Initialize default categories and fund sources."""

import click
from dompet.domain.category import CategoryService
from dompet.domain.entities import TransactionType
from dompet.domain.errors import ConflictError
from dompet.domain.fund_source import FundSourceService
from dompet.domain.links import (
    DEBT_PAYMENT_CATEGORY,
    DIVESTMENT_CATEGORY,
    GOAL_SAVINGS_CATEGORY,
    INVESTMENT_CATEGORY,
    RECEIVABLE_PAYMENT_CATEGORY,
)


DEFAULT_CATEGORIES = [
    # Income
    ("Gaji", TransactionType.INCOME),
    ("Bonus", TransactionType.INCOME),
    ("Hadiah", TransactionType.INCOME),
    ("Lainnya", TransactionType.INCOME),
    (DIVESTMENT_CATEGORY, TransactionType.INCOME),
    (RECEIVABLE_PAYMENT_CATEGORY, TransactionType.INCOME),
    # Expense
    ("Makanan & Minuman", TransactionType.EXPENSE),
    ("Transportasi", TransactionType.EXPENSE),
    ("Tagihan", TransactionType.EXPENSE),
    ("Belanja", TransactionType.EXPENSE),
    ("Hiburan", TransactionType.EXPENSE),
    ("Kesehatan", TransactionType.EXPENSE),
    ("Pendidikan", TransactionType.EXPENSE),
    ("Lainnya", TransactionType.EXPENSE),
    (GOAL_SAVINGS_CATEGORY, TransactionType.EXPENSE),
    (INVESTMENT_CATEGORY, TransactionType.EXPENSE),
    (DEBT_PAYMENT_CATEGORY, TransactionType.EXPENSE),
]

DEFAULT_FUND_SOURCES = ["Tunai", "Rekening Bank", "Dompet Digital", "Kartu Kredit"]


@click.command("init-data")
@click.pass_context
def init_data(ctx):
    """Create the default categories and fund sources.

    Existing entries are kept, so the command is safe to run again.
    """
    db = ctx.obj["db"]
    category_service = CategoryService(db)
    fund_source_service = FundSourceService(db)

    created = 0
    skipped = 0

    for name, category_type in DEFAULT_CATEGORIES:
        try:
            category_service.create_category(name=name, type=category_type)
            created += 1
        except ConflictError:
            skipped += 1

    for name in DEFAULT_FUND_SOURCES:
        try:
            fund_source_service.create_fund_source(name=name)
            created += 1
        except ConflictError:
            skipped += 1

    click.echo(f"Created {created} entries ({skipped} already existed).")


def register_commands(cli):
    """Register init-data command with main CLI."""
    cli.add_command(init_data)
