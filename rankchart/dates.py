from __future__ import annotations

import calendar
import datetime as dt


ONE_DAY = dt.timedelta(days=1)

_MONTH_ABBR: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def end_of_month(day: dt.date) -> dt.date:
    _, last = calendar.monthrange(day.year, day.month)
    return day.replace(day=last)


def first_of_next_month(day: dt.date) -> dt.date:
    return end_of_month(day) + ONE_DAY


def month_abbr(day: dt.date) -> str:
    return _MONTH_ABBR[day.month - 1]
