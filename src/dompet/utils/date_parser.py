"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# English and Indonesian words for days relative to today.
_RELATIVE_DAYS = {
    "today": 0,
    "hari ini": 0,
    "yesterday": -1,
    "kemarin": -1,
    "tomorrow": 1,
    "besok": 1,
}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-01-15"
    - Day-first dates as written in Indonesia: "15/01/2024", "15 Jan 2024"
    - Relative dates: "today", "yesterday", "tomorrow" (or "hari ini",
      "kemarin", "besok"), "this month", "last month", "next month"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    if date_str in _RELATIVE_DAYS:
        return today + timedelta(days=_RELATIVE_DAYS[date_str])

    if date_str.endswith(" month"):
        first_of_month = today.replace(day=1)
        offsets = {"last month": -1, "this month": 0, "next month": 1}
        if date_str in offsets:
            return first_of_month + relativedelta(months=offsets[date_str])

    try:
        return parse_iso_date(date_str)
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_iso_date(date_str: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` date.

    Raises:
        ValueError: If the string is not a valid ISO calendar date
    """
    try:
        parsed = date_parser.isoparse(date_str.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid ISO date '{date_str}': {e}")
    return parsed.date()


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: this-month, last-month, this-year or last-year

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    start_of_month = today.replace(day=1)
    start_of_year = today.replace(month=1, day=1)

    if period == "this-month":
        return (start_of_month, today)

    elif period == "last-month":
        return (start_of_month - relativedelta(months=1), start_of_month - timedelta(days=1))

    elif period == "this-year":
        return (start_of_year, today)

    elif period == "last-year":
        return (start_of_year - relativedelta(years=1), start_of_year - timedelta(days=1))

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year, last-year"
        )
