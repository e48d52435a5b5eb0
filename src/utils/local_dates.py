from __future__ import annotations

from datetime import date, datetime, timedelta

from zoneinfo import ZoneInfo

# Default farm timezone; only used to decide what "today" is
DEFAULT_TIMEZONE_NAME = "America/Sao_Paulo"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def today_local(tz: ZoneInfo | str | None = None) -> date:
    """Return the current calendar date in the farm's timezone."""
    if isinstance(tz, str):
        tz = ZoneInfo(tz)
    return datetime.now(tz or DEFAULT_TZ).date()


def parse_local_date(value: date | datetime | str | None) -> date | None:
    """Parse a local calendar date.

    Accepts `date`, `datetime` (its calendar date is kept, no timezone shift) and
    ISO strings, including timestamps such as '2024-01-01T08:00:00Z' where only
    the 'YYYY-MM-DD' prefix is meaningful. Returns None for empty input and
    raises ValueError for garbage.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = value.strip()
    if not s:
        return None
    return date.fromisoformat(s.split("T", 1)[0][:10])


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def format_local_date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def js_weekday(value: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return (value.weekday() + 1) % 7
