# backend/archive_api/utils/validators.py
import re
from datetime import datetime
from typing import Optional, Tuple, Union

from archive_api.core.config import settings
from archive_api.schemas.article import DateQuery

Component = Union[str, int]

_INTEGER = re.compile(r"^[+-]?[0-9]+$")


class InvalidQuery(ValueError):
    """Raised when request date parameters cannot form a valid archive query."""


def _parse_int(raw: Optional[Component]) -> Optional[int]:
    if raw is None:
        return None
    s = str(raw).strip()
    if not _INTEGER.match(s):
        return None
    return int(s)


def _require_int(raw: Component, what: str) -> int:
    n = _parse_int(raw)
    if n is None:
        raise InvalidQuery(f"{what} must be an integer, got {raw!r}")
    return n


def format_components(year: Component, month: Component, day: Component) -> Tuple[str, str, str]:
    """Zero-pad single-digit month and day; anything else passes through as-is."""
    year, month, day = (str(c).strip() for c in (year, month, day))
    num_month = _parse_int(month)
    num_day = _parse_int(day)
    if num_month is not None and 0 < num_month < 10:
        month = f"{num_month:02d}"
    if num_day is not None and 0 < num_day < 10:
        day = f"{num_day:02d}"
    return year, month, day


def is_calendar_valid(year: Component, month: Component, day: Component) -> bool:
    y, m, d = format_components(year, month, day)
    try:
        datetime.strptime(f"{m}/{d}/{y}", "%m/%d/%Y")
    except ValueError:
        return False
    return True


def validate_query(
    year: Optional[Component],
    month: Optional[Component],
    day: Optional[Component] = None,
    hour: Optional[Component] = None,
    now: Optional[datetime] = None,
) -> DateQuery:
    """
    Check request date parameters and return the normalized DateQuery.

    ``None`` means the parameter was not supplied. Rules run in order and the
    first failure raises InvalidQuery:
      - year and month are required
      - ARCHIVE_START_YEAR <= year <= current year
      - no month after the current one in the current year
      - 1 <= month <= 12
      - day must form a real date and not be after today
      - 0 <= hour <= 23, only together with a day, and not after the current hour
    """
    now = now or datetime.now(settings.tz)

    if year in (None, "") or month in (None, ""):
        raise InvalidQuery("year and month are required")

    y = _require_int(year, "year")
    if y < settings.ARCHIVE_START_YEAR or y > now.year:
        raise InvalidQuery(f"year {y} is outside {settings.ARCHIVE_START_YEAR}-{now.year}")

    m = _require_int(month, "month")
    if y == now.year and m > now.month:
        raise InvalidQuery(f"{y}-{m} is in the future")
    if m < 1 or m > 12:
        raise InvalidQuery(f"month {m} is out of range")

    d = None
    if day is not None:
        if not is_calendar_valid(y, m, day):
            raise InvalidQuery(f"{y}-{m}-{day} is not a calendar date")
        d = _require_int(day, "day")
        if y == now.year and m == now.month and d > now.day:
            raise InvalidQuery(f"{y}-{m}-{d} is in the future")

    h = None
    if hour is not None:
        h = _require_int(hour, "hour")
        if h < 0 or h > 23:
            raise InvalidQuery(f"hour {h} is out of range")
        if d is None:
            raise InvalidQuery("hour requires a day")
        if (y, m, d) == (now.year, now.month, now.day) and h > now.hour:
            raise InvalidQuery(f"{y}-{m}-{d} {h}h is in the future")

    return DateQuery(year=y, month=m, day=d, hour=h)
