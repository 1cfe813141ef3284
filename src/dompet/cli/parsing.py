"""CLI helpers for parsing user input."""

from datetime import date

import click

from dompet.cli.error_handling import fail
from dompet.utils.amount_parser import parse_amount
from dompet.utils.date_parser import get_date_range, parse_date


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option, exiting with an error message if it is invalid."""
    try:
        return parse_date(value)
    except ValueError as e:
        fail(ctx, f"Invalid {label}: {e}")


def parse_amount_or_exit(ctx: click.Context, value: str) -> float:
    """Parse an amount option, exiting with an error message if it is invalid."""
    try:
        return parse_amount(value)
    except ValueError as e:
        fail(ctx, f"Invalid amount format: {e}")


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from a named period or explicit dates."""
    if period and (start_date or end_date):
        fail(ctx, "--period cannot be combined with --start-date or --end-date.")

    if period:
        try:
            return get_date_range(period)
        except ValueError as e:
            fail(ctx, str(e))

    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None
    return start, end

