from __future__ import annotations

import datetime as dt

from git_commits_analyzer.analysis_periods import (
    day_key,
    month_data_key,
    month_display_label,
    month_key,
    month_scale,
    weekday_abbr,
)


def test_month_scale_fills_gaps() -> None:
    assert month_scale(["2021-05", "2021-03"]) == [(2021, 3), (2021, 4), (2021, 5)]


def test_month_scale_crosses_years() -> None:
    assert month_scale(["2020-11", "2021-02"]) == [(2020, 11), (2020, 12), (2021, 1), (2021, 2)]


def test_month_scale_single_and_empty() -> None:
    assert month_scale(["2024-07"]) == [(2024, 7)]
    assert month_scale([]) == []


def test_month_labels() -> None:
    assert month_display_label(2021, 4) == "Apr-2021"
    assert month_display_label(1999, 12) == "Dec-1999"
    assert month_data_key(2021, 4) == "2021-04"


def test_keys_are_zero_padded() -> None:
    d = dt.datetime(2021, 3, 7, 9, 5)
    assert month_key(d) == "2021-03"
    assert day_key(d) == "2021-03-07"


def test_weekday_abbr() -> None:
    assert weekday_abbr(dt.date(2024, 1, 1)) == "Mon"
    assert weekday_abbr(dt.date(2024, 1, 7)) == "Sun"
