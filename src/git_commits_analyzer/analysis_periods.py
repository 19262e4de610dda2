from __future__ import annotations

import datetime as dt
from typing import Iterable

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_ABBRS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_key(d: dt.datetime | dt.date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def day_key(d: dt.datetime | dt.date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def weekday_abbr(d: dt.datetime | dt.date) -> str:
    return WEEKDAYS[d.weekday()]


def parse_month_key(key: str) -> tuple[int, int]:
    y, m = key.split("-", 1)
    return int(y), int(m)


def month_scale(keys: Iterable[str]) -> list[tuple[int, int]]:
    """Every (year, month) from the earliest to the latest key, gaps included."""
    ordered = sorted(keys)
    if not ordered:
        return []
    year, month = parse_month_key(ordered[0])
    end = parse_month_key(ordered[-1])
    out: list[tuple[int, int]] = []
    while (year, month) <= end:
        out.append((year, month))
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1
    return out


def month_display_label(year: int, month: int) -> str:
    return f"{MONTH_ABBRS[month - 1]}-{year}"


def month_data_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"
