"""Date and time parsing utilities."""

from datetime import date, datetime, time, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "tomorrow", "next friday", "next week", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("next "):
        period = date_str[5:]
        if period == "week":
            # Monday of next week
            return today + timedelta(days=(7 - today.weekday()))
        elif period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period in WEEKDAYS:
            days_ahead = (WEEKDAYS.index(period) - today.weekday()) % 7
            if days_ahead == 0:
                days_ahead = 7
            return today + timedelta(days=days_ahead)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_time(time_str: str) -> time:
    """Parse a time of day such as "14:30", "9am" or "2:15 pm".

    Raises:
        ValueError: If time string cannot be parsed
    """
    try:
        return date_parser.parse(time_str.strip(), default=datetime(2000, 1, 1)).time()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse time '{time_str}': {e}")


def parse_datetime(value: str, at: str | None = None) -> datetime:
    """Parse an appointment start.

    Args:
        value: A date ("tomorrow", "next friday", "2024-05-01") or a full
            timestamp ("2024-05-01 14:30")
        at: Optional time of day, overriding any time in value

    Returns:
        Naive datetime. A date without a time means midnight.

    Raises:
        ValueError: If either part cannot be parsed
    """
    text = value.strip().lower()
    if text in ("today", "yesterday", "tomorrow") or text.startswith("next "):
        start = datetime.combine(parse_date(text), time(0, 0))
    else:
        try:
            start = date_parser.parse(text).replace(tzinfo=None)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse date/time '{value}': {e}")

    if at is not None:
        start = datetime.combine(start.date(), parse_time(at))
    return start
