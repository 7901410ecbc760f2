"""UTC Day Window — inclusive [00:00:00.000, 23:59:59.999] bounds for a calendar date.

Invariants:
    - Both bounds are timezone-aware UTC datetimes
    - Upper bound is the last millisecond of the day, compared with <=
    - Pure function: no IO, no clock access
"""

from datetime import date, datetime, time, timezone

_LAST_MILLISECOND = time(23, 59, 59, 999_000)


def utc_day_window(day: date) -> tuple[datetime, datetime]:
    """Return (start, end) covering `day` in UTC, both inclusive."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = datetime.combine(day, _LAST_MILLISECOND, tzinfo=timezone.utc)
    return start, end
