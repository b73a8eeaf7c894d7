"""Lenient date/time parsing for spreadsheet input."""

from datetime import datetime, timezone

# Tried in order after ISO 8601. Day-first comes before month-first, so
# 03/01/2026 is 3 January. Month-first only matches when the second number
# is over 12.
DATETIME_FORMATS = [
    "%Y-%m-%d %H:%M",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%d-%m-%Y",
]


def parse_datetime(value: str) -> datetime | None:
    """Parse a date or date/time string.

    Accepts ISO 8601 (including a trailing ``Z``) and a few common
    spreadsheet formats. Values without a timezone are taken as UTC.

    Slash dates are read day first: ``03/01/2026`` is 3 January 2026 and
    ``12/31/2026`` only parses as month first because 31 is not a month.
    Use ISO 8601 to avoid the ambiguity.

    Returns:
        A timezone-aware datetime, or None if the value is not recognised
    """
    text = value.strip()
    if not text:
        return None

    parsed = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in DATETIME_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
