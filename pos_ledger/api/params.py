"""
Query parameter helpers shared by the routers.

Reports and listings take calendar dates. A range covers whole
days: from 00:00 on the start date to the last microsecond of
the end date.
"""

from datetime import date, datetime, time


def day_start(value: date | None) -> datetime | None:
    if value is None:
        return None
    return datetime.combine(value, time.min)


def day_end(value: date | None) -> datetime | None:
    if value is None:
        return None
    return datetime.combine(value, time.max)
