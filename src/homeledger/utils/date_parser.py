"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Tried in order after the bank's own format. Day-first, since the supported
# banks all print day before month.
COMMON_STATEMENT_FORMATS = (
    "%d/%m/%Y",
    "%d-%m-%y",
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%d/%m/%y",
    "%d.%m.%Y",
    "%d-%b-%Y",
    "%d-%b-%y",
    "%d %b %Y",
    "%d %B %Y",
    "%d/%b/%Y",
    "%b %d, %Y",
    "%b %d %Y",
)

TRAILING_TIME = re.compile(r"[ T]+\d{1,2}:\d{2}(?::\d{2})?(?:\s*[AaPp][Mm])?$")
MONTH_NAME = re.compile(r"[A-Za-z]{3,}")
FOUR_DIGIT_YEAR = re.compile(r"\d{4}")


def parse_statement_date(date_str: str, preferred_format: Optional[str] = None) -> date:
    """Parse a date cell from a bank statement.

    The bank's known format is tried first, then COMMON_STATEMENT_FORMATS.
    Month-name dates that none of those cover are handed to dateutil
    (day-first) as long as they carry a four digit year.

    Args:
        date_str: Raw cell text, optionally with a trailing time
        preferred_format: strptime format the detected bank uses

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    if date_str is None or not str(date_str).strip():
        raise ValueError("Empty date string")

    clean = TRAILING_TIME.sub("", str(date_str).strip())

    formats = COMMON_STATEMENT_FORMATS
    if preferred_format:
        formats = (preferred_format,) + formats

    for fmt in formats:
        try:
            return datetime.strptime(clean, fmt).date()
        except ValueError:
            continue

    if MONTH_NAME.search(clean) and FOUR_DIGIT_YEAR.search(clean):
        try:
            return date_parser.parse(clean, dayfirst=True).date()
        except (ValueError, OverflowError):
            pass

    raise ValueError(f"Could not parse date '{date_str}'")


def parse_date(date_str: str) -> date:
    """Parse a user-typed date, accepting a few relative words.

    Supports "today", "yesterday", "this month", "last month", "this year",
    "last year" and anything dateutil understands.

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
