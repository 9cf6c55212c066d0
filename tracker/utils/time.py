from datetime import date, datetime, time, timedelta

from django.utils import timezone


def local_day(dt) -> date:
    """Calendar day of `dt` in the active time zone (naive values as-is)."""
    if isinstance(dt, datetime):
        if timezone.is_naive(dt):
            return dt.date()
        return timezone.localtime(dt).date()
    return dt


def start_of_day(dt) -> datetime:
    day = local_day(dt)
    midnight = datetime.combine(day, time.min)
    if isinstance(dt, datetime) and timezone.is_naive(dt):
        return midnight
    return timezone.make_aware(midnight, timezone.get_current_timezone())


def days_between(earlier, later) -> int:
    """Whole calendar days from `earlier` to `later`."""
    return (local_day(later) - local_day(earlier)).days


def add_days(dt, days: int):
    return dt + timedelta(days=days)


def to_local_iso(dt) -> str:
    if timezone.is_naive(dt):
        return dt.isoformat()
    return timezone.localtime(dt).isoformat()
