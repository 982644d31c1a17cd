"""Date helpers for receipt parsing."""

import calendar
import re
from datetime import date, datetime

DATE_TOKEN = re.compile(r"\d{1,2}[/-]\d{1,2}[/-]\d{2,4}")

# Tried in order. strptime accepts month/day without leading zeros,
# so these also cover the M/D/YY and M/D/YYYY layouts.
DATE_FORMATS = (
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%m/%d/%y",
    "%m-%d-%y",
)

# Two-digit years map into [TWO_DIGIT_YEAR_PIVOT, TWO_DIGIT_YEAR_PIVOT + 99].
TWO_DIGIT_YEAR_PIVOT = 1950


def _apply_year_pivot(parsed: date) -> date:
    """Re-anchor a %y-parsed date into the 1950-2049 window."""
    two_digit = parsed.year % 100
    century = TWO_DIGIT_YEAR_PIVOT - TWO_DIGIT_YEAR_PIVOT % 100
    year = century + two_digit
    if year < TWO_DIGIT_YEAR_PIVOT:
        year += 100
    return parsed.replace(year=year)


def parse_date_token(token: str) -> date | None:
    """Parse one date-shaped token against DATE_FORMATS."""
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(token, fmt).date()
        except ValueError:
            continue
        if fmt.endswith("%y"):
            try:
                return _apply_year_pivot(parsed)
            except ValueError:
                # Feb 29 that does not exist in the pivoted year.
                continue
        return parsed
    return None


def extract_date(line: str) -> date | None:
    """Find and parse the first date-shaped substring of a line (None if absent)."""
    match = DATE_TOKEN.search(line)
    if match is None:
        return None
    return parse_date_token(match.group(0))


def shift_months(value: date, months: int) -> date:
    """Move a date by whole calendar months, clamping the day to the month end."""
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def month_bounds(value: date) -> tuple[date, date]:
    """Return the first and last day of the month containing value."""
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=1), value.replace(day=last_day)


def as_date(value: date | datetime) -> date:
    """Reduce datetimes to day granularity."""
    if isinstance(value, datetime):
        return value.date()
    return value
