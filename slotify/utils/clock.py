# slotify/utils/clock.py
"""Timestamp helpers. All persisted timestamps are naive UTC."""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_local_day(now: Optional[datetime] = None, tz_name: Optional[str] = None) -> datetime:
    """
    Midnight of the current local day, expressed as naive UTC.
    `now` is naive UTC (defaults to the current time). `tz_name` selects the
    local timezone; None means the server's own timezone.
    """
    now = now or utcnow()
    aware_utc = now.replace(tzinfo=timezone.utc)
    if tz_name:
        local = aware_utc.astimezone(ZoneInfo(tz_name))
        midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    else:
        # Naive local midnight; astimezone() looks up the offset in force at
        # midnight itself, which differs from the current one on DST days
        local = aware_utc.astimezone()
        midnight = local.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)
