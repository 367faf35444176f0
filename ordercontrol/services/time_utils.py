"""
time_utils.py
-------------
Helpers to parse stored 'HH:MM' times and ISO timestamps into values that can be
compared against the store's current local time.
"""

from datetime import datetime, time
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def parse_hhmm(value: str) -> time:
    h, m = value.strip().split(":")[:2]
    return time(int(h), int(m))


def format_hhmm(value: time | None) -> str:
    if value is None:
        return ""
    return value.strftime("%H:%M")


def make_aware(dt_naive: datetime):
    """
    Convert a naive datetime to an aware one using Django's current timezone.
    """
    if timezone.is_aware(dt_naive):
        return dt_naive
    return timezone.make_aware(dt_naive, timezone.get_current_timezone())


def parse_timestamp(value: str):
    """
    Parse 'YYYY-MM-DDTHH:MM[:SS]' or 'YYYY-MM-DD' (midnight) into an aware datetime.
    Raises ValueError for anything else.
    """
    value = (value or "").strip()
    dt = parse_datetime(value)
    if dt is None:
        d = parse_date(value)
        if d is None:
            raise ValueError(f"Invalid timestamp: {value!r}")
        dt = datetime(d.year, d.month, d.day)
    return make_aware(dt)


def format_timestamp(value) -> str:
    """
    'YYYY-MM-DDTHH:MM' in the store timezone; seconds are kept when set.
    """
    if value is None:
        return ""
    value = timezone.localtime(value)
    if value.microsecond:
        return value.strftime("%Y-%m-%dT%H:%M:%S.%f")
    if value.second:
        return value.strftime("%Y-%m-%dT%H:%M:%S")
    return value.strftime("%Y-%m-%dT%H:%M")


def local_now():
    """Current time in the store's timezone."""
    return timezone.localtime(timezone.now())


def minute_of(now) -> time:
    """Time-of-day of 'now' truncated to the minute."""
    return now.time().replace(second=0, microsecond=0)
