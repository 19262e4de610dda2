from __future__ import annotations

import json
from pathlib import Path

from git_commits_analyzer.analysis_repo import CommitsAnalyzer
from git_commits_analyzer.analysis_write import format_stats, to_json, write_stats

ME = "me@example.com"


def _analyzer_with_gap() -> CommitsAnalyzer:
    a = CommitsAnalyzer([ME], started_at=1_700_000_000)
    a.commits_total = 3
    a.commits_by_month["2021-03"] = 2
    a.commits_by_month["2021-05"] = 1
    a.lines_by_month["2021-03"] = {"added": 10, "deleted": 4}
    a.lines_by_month["2021-05"] = {"added": 1, "deleted": 0}
    a.lines_by_language["Python"] = {"added": 11, "deleted": 4, "commits": 3}
    a.commit_hours[9] = 3
    a.commit_days["2021-03-01"] = 2
    a.commit_days["2021-05-03"] = 1
    a.commit_weekdays_hours["Mon"][9] = 3
    a.metadata.repositories_analyzed = 1
    a.metadata.ms_spent = 42
    return a


def test_format_stats_month_scale_fills_missing_months() -> None:
    data = format_stats(_analyzer_with_gap())

    assert data["commits_total"] == 3
    assert data["commits_by_month"] == [
        {"month": "Mar-2021", "commits": 2},
        {"month": "Apr-2021", "commits": 0},
        {"month": "May-2021", "commits": 1},
    ]
    assert data["lines_by_month"] == [
        {"month": "Mar-2021", "added": 10, "deleted": 4},
        {"month": "Apr-2021", "added": 0, "deleted": 0},
        {"month": "May-2021", "added": 1, "deleted": 0},
    ]


def test_format_stats_shape() -> None:
    data = format_stats(_analyzer_with_gap())

    assert list(data) == [
        "commits_total",
        "commits_by_month",
        "commits_by_hour",
        "commits_by_day",
        "commit_by_weekday_hour",
        "lines_by_language",
        "lines_by_month",
        "analysis_metadata",
    ]
    assert len(data["commits_by_hour"]) == 24
    assert data["commits_by_hour"][9] == 3
    assert data["commits_by_day"] == {"2021-03-01": 2, "2021-05-03": 1}
    assert list(data["commit_by_weekday_hour"]) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert data["commit_by_weekday_hour"]["Mon"][9] == 3
    assert data["lines_by_language"] == {"Python": {"added": 11, "deleted": 4, "commits": 3}}
    assert data["analysis_metadata"] == {"started_at": 1_700_000_000, "repositories_analyzed": 1, "ms_spent": 42}


def test_format_stats_without_commits() -> None:
    data = format_stats(CommitsAnalyzer([ME]))
    assert data["commits_total"] == 0
    assert data["commits_by_month"] == []
    assert data["lines_by_month"] == []
    assert len(data["commits_by_hour"]) == 24
    assert all(len(hours) == 24 for hours in data["commit_by_weekday_hour"].values())


def test_pretty_and_compact_decode_identically() -> None:
    data = format_stats(_analyzer_with_gap())
    pretty = to_json(data, pretty=True)
    compact = to_json(data, pretty=False)

    assert "\n  " in pretty
    assert "\n" not in compact
    assert len(compact) < len(pretty)
    assert json.loads(pretty) == json.loads(compact)


def test_write_stats(tmp_path: Path) -> None:
    out = tmp_path / "out" / "stats.json"
    data = format_stats(_analyzer_with_gap())
    write_stats(out, data, pretty=False)

    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded["commits_total"] == 3
    # JSON object keys are strings.
    assert loaded["commits_by_hour"]["9"] == 3
