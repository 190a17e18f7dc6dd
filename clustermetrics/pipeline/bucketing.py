from datetime import datetime, time, timedelta
from typing import List


def hour_bucket(ts: datetime) -> datetime:
    return ts.replace(minute=0, second=0, microsecond=0)


def day_bucket(ts: datetime) -> datetime:
    return ts.replace(hour=0, minute=0, second=0, microsecond=0)


def is_hour_aligned(ts: datetime) -> bool:
    return ts.minute == 0 and ts.second == 0 and ts.microsecond == 0


def daily_stamp(day: datetime, clock: datetime) -> datetime:
    """Stamp a day bucket with the wall-clock hour:minute of ``clock``."""
    return datetime.combine(
        day.date(), time(clock.hour, clock.minute), tzinfo=day.tzinfo
    )


def floor_to_minute(ts: datetime) -> datetime:
    return ts.replace(second=0, microsecond=0)


def enumerate_minutes(end: datetime, count: int) -> List[datetime]:
    """``count`` consecutive minute instants ending (inclusive) at ``end``."""
    start = floor_to_minute(end) - timedelta(minutes=count - 1)
    return [start + timedelta(minutes=i) for i in range(count)]
