"""Quick date-range presets for bank transaction filters."""

from datetime import datetime, time, timedelta

from cari_consolidation.domain.constants import QUICK_RANGE_PRESETS
from cari_consolidation.domain.models import DateRange


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def _end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.max)


def _first_of_month(moment: datetime) -> datetime:
    return _start_of_day(moment.replace(day=1))


def quick_date_range(preset: str, now: datetime | None = None) -> DateRange:
    """Resolve a preset to a concrete inclusive range.

    Weeks run Monday to Sunday and months follow the calendar. The range
    is computed from ``now`` (default: the current moment) on every call.

    Args:
        preset: One of ``today``, ``yesterday``, ``thisWeek``, ``lastWeek``,
            ``thisMonth`` or ``lastMonth``.
        now: Reference moment.

    Returns:
        DateRange: Start at 00:00:00 and end at 23:59:59.999999.

    Raises:
        ValueError: If the preset is unknown.
    """
    if preset not in QUICK_RANGE_PRESETS:
        raise ValueError(
            f"Unknown date range preset: {preset}. "
            f"Expected one of {', '.join(QUICK_RANGE_PRESETS)}."
        )
    now = now or datetime.now()
    today = _start_of_day(now)

    if preset == "today":
        return DateRange(start=today, end=_end_of_day(today))
    if preset == "yesterday":
        yesterday = today - timedelta(days=1)
        return DateRange(start=yesterday, end=_end_of_day(yesterday))
    if preset in ("thisWeek", "lastWeek"):
        monday = today - timedelta(days=today.weekday())
        if preset == "lastWeek":
            monday -= timedelta(days=7)
        return DateRange(
            start=monday,
            end=_end_of_day(monday + timedelta(days=6)),
        )

    month_start = _first_of_month(today)
    if preset == "lastMonth":
        month_start = _first_of_month(month_start - timedelta(days=1))
    next_month = _first_of_month(month_start + timedelta(days=32))
    return DateRange(
        start=month_start,
        end=_end_of_day(next_month - timedelta(days=1)),
    )


def default_date_range(now: datetime | None = None) -> DateRange:
    """Return today's range, used when a screen opens without filters."""
    return quick_date_range("today", now)


__all__ = ["quick_date_range", "default_date_range"]
