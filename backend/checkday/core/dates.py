"""
Calendar day keys

All persisted daily data is partitioned by a ``YYYY-MM-DD`` key taken from
the local wall-clock date, never from UTC.
"""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, List, Optional, Union
from zoneinfo import ZoneInfo

from ..config import settings

Clock = Callable[[], date]

# Day arithmetic runs at midday so a DST shift can never move the date
_ANCHOR_HOUR = time(12, 0)


def local_timezone() -> Optional[tzinfo]:
    """Configured zone, or None for the server's local time"""
    if settings.timezone:
        return ZoneInfo(settings.timezone)
    return None


def day_key(moment: Union[date, datetime]) -> str:
    """Format the local calendar date of ``moment`` as YYYY-MM-DD"""
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(local_timezone())
        moment = moment.date()
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def local_today() -> date:
    """Today's date on the local wall clock"""
    return datetime.now(local_timezone()).date()


def today_key(clock: Clock = local_today) -> str:
    return day_key(clock())


def last_n_days(n: int, today: date) -> List[date]:
    """``n`` consecutive dates ending at ``today``, most recent first"""
    base = datetime.combine(today, _ANCHOR_HOUR)
    return [(base - timedelta(days=i)).date() for i in range(max(n, 0))]
