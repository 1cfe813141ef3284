"""Category and fund source management commands."""

import click
from dompet.cli.error_handling import handle_domain_error
from dompet.domain.category import CategoryService
from dompet.domain.entities import TransactionType
from dompet.domain.fund_source import FundSourceService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice([t.value for t in TransactionType]))
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories grouped by type."""
    service = CategoryService(ctx.obj["db"])
    categories = service.list_categories(TransactionType(category_type) if category_type else None)
    if not categories:
        click.echo("No categories found. Run 'init-data' to create default categories.")
        return

    current_type = None
    for cat in categories:
        if cat.type is not current_type:
            current_type = cat.type
            click.echo(f"\n{current_type.value.capitalize()}:")
        click.echo(f"  {cat.name} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, category_type: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(
            name=name, type=TransactionType(category_type.lower())
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {category_type.lower()} category '{name}' (ID: {category_id})")


@click.group()
def fund_source_group():
    """Manage fund sources."""
    pass


@fund_source_group.command("list")
@click.pass_context
def list_fund_sources(ctx):
    """List fund sources."""
    fund_sources = FundSourceService(ctx.obj["db"]).list_fund_sources()
    if not fund_sources:
        click.echo("No fund sources found. Run 'init-data' to create default fund sources.")
        return
    for fund_source in fund_sources:
        click.echo(f"{fund_source.name} (ID: {fund_source.id})")


@fund_source_group.command("create")
@click.argument("name")
@click.pass_context
def create_fund_source(ctx, name: str):
    """Create a new fund source."""
    service = FundSourceService(ctx.obj["db"])
    try:
        fund_source_id = service.create_fund_source(name=name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created fund source '{name}' (ID: {fund_source_id})")


def register_commands(cli):
    """Register category and fund source commands with main CLI."""
    cli.add_command(category_group, name="category")
    cli.add_command(fund_source_group, name="fund-source")
