"""Calendar helpers for the fetch window.

All values are naive datetimes interpreted in local time, matching how the
ledger dates are parsed.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime


def add_months(value: datetime, months: int) -> datetime:
    """Shift ``value`` by ``months`` calendar months, clamping the day.

    ``add_months(datetime(2023, 1, 31), 1)`` is ``2023-02-28``.
    """

    index = value.year * 12 + (value.month - 1) + months
    year, month0 = divmod(index, 12)
    day = min(value.day, calendar.monthrange(year, month0 + 1)[1])
    return value.replace(year=year, month=month0 + 1, day=day)


def start_of_month(value: datetime) -> datetime:
    return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _as_datetime(value: datetime | date) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def compute_start(start_date: datetime | date | None, now: datetime) -> datetime:
    """Effective window start: the later of ``now - 1 year`` and ``start_date``."""

    default_start = add_months(now, -12)
    if start_date is None:
        return default_start
    return max(default_start, _as_datetime(start_date))


def get_all_month_starts(
    start: datetime, now: datetime, *, include_next: bool = False
) -> list[datetime]:
    """First-of-month datetimes from ``start``'s month through ``now``'s month.

    With ``include_next`` the month after ``now`` is appended as well.
    """

    month = start_of_month(start)
    last = start_of_month(now)
    if include_next:
        last = add_months(last, 1)

    months: list[datetime] = []
    while month <= last:
        months.append(month)
        month = add_months(month, 1)
    return months


__all__ = ["add_months", "start_of_month", "compute_start", "get_all_month_starts"]
