from __future__ import annotations

from datetime import date, datetime, time, timezone

from zoneinfo import ZoneInfo

# Farm-local timezone; calendar-day arithmetic is done in this zone
DEFAULT_TIMEZONE_NAME = "Asia/Karachi"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def local_today() -> date:
    return datetime.now(DEFAULT_TZ).date()


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, assuming DEFAULT_TZ for naive values."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=DEFAULT_TZ)
    return dt.astimezone(timezone.utc)


def parse_datetime(value: date | datetime | str | None) -> datetime | None:
    """Parse ISO date/datetime input into an aware UTC datetime.

    Accepts ``date``/``datetime`` objects and ISO strings (with optional
    trailing 'Z'). Date-only values are taken as local midnight. Returns
    None for empty or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return to_utc(datetime.combine(value, time(0, 0)))
    s = str(value).strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return to_utc(datetime.fromisoformat(s))
    except ValueError:
        return None


def to_local_date(value: date | datetime | str | None) -> date | None:
    """Normalize any supported date input to a farm-local calendar date."""
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        # Plain YYYY-MM-DD: no time component to shift across zones
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    dt = parse_datetime(value)
    if dt is None:
        return None
    return dt.astimezone(DEFAULT_TZ).date()


def format_date(value: date | datetime | str | None) -> str:
    """Return 'dd/mm/yyyy', or '--' when the value is missing or invalid."""
    d = to_local_date(value)
    if d is None:
        return "--"
    return d.strftime("%d/%m/%Y")
