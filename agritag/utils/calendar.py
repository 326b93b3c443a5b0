"""
Calendar utilities for date parsing and month arithmetic.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or timestamp into an aware UTC datetime.

    Accepts plain dates ("2024-01-15") and timestamps with a "Z" suffix or
    an explicit offset. Naive timestamps are taken as UTC.

    Args:
        value: Date or timestamp string

    Returns:
        Aware datetime in UTC, or None if the value is empty or unparseable
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # Offsets at either end of the calendar can shift out of range
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse an ISO-8601 date or timestamp into its UTC calendar date.

    Returns:
        The calendar date, or None if the value is empty or unparseable
    """
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None


def add_months(value: date, months: int) -> date:
    """
    Add calendar months, letting the day of month overflow.

    The month field is moved first and any days the target month lacks
    spill into the month after it, so 2024-01-31 + 1 month is 2024-03-02
    and 2023-01-31 + 1 month is 2023-03-03. Negative ``months`` move back
    with the same rule.

    Args:
        value: Start date
        months: Number of months to add (may be negative)

    Returns:
        The shifted date

    Raises:
        ValueError: If the result falls outside years 1-9999
    """
    index = value.year * 12 + (value.month - 1) + months
    year, month_index = divmod(index, 12)
    return date(year, month_index + 1, 1) + timedelta(days=value.day - 1)


def months_between(earlier: date, later: date) -> int:
    """Whole calendar months between two dates, ignoring the day of month."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)
