"""Calendar helpers for review and retirement windows."""

from __future__ import annotations

import calendar
from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def add_months(value: datetime, months: int) -> datetime:
    """Shift ``value`` by whole calendar months, clamping the day to the target month."""

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def months_before(value: datetime, months: int) -> datetime:
    return add_months(value, -months)


def is_older_than(moment: datetime | None, *, months: int, now: datetime) -> bool:
    """Return whether ``moment`` lies more than ``months`` calendar months before ``now``.

    An unknown moment counts as old.
    """

    if moment is None:
        return True
    return moment < months_before(now, months)


def format_date(value: datetime | None) -> str:
    if value is None:
        return "unknown"
    return value.strftime("%Y-%m-%d")


__all__ = ["Clock", "add_months", "format_date", "is_older_than", "months_before", "utcnow"]
