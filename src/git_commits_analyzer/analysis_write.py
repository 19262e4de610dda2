from __future__ import annotations

import json
from pathlib import Path

from .analysis_periods import month_data_key, month_display_label, month_scale
from .analysis_repo import CommitsAnalyzer

OUTPUT_FILENAME = "git_contributions.json"


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def format_stats(analyzer: CommitsAnalyzer) -> dict[str, object]:
    """
    Reshape the analyzer's running totals into the published structure.

    Monthly series cover every month between the first and the last month with
    a commit, with zeros for months without activity.
    """
    commits_by_month: list[dict[str, object]] = []
    lines_by_month: list[dict[str, object]] = []
    for year, month in month_scale(analyzer.commits_by_month.keys()):
        display_key = month_display_label(year, month)
        data_key = month_data_key(year, month)

        commits_by_month.append(
            {
                "month": display_key,
                "commits": int(analyzer.commits_by_month.get(data_key, 0)),
            }
        )
        month_lines = analyzer.lines_by_month.get(data_key, {})
        lines_by_month.append(
            {
                "month": display_key,
                "added": int(month_lines.get("added", 0)),
                "deleted": int(month_lines.get("deleted", 0)),
            }
        )

    return {
        "commits_total": int(analyzer.commits_total),
        "commits_by_month": commits_by_month,
        "commits_by_hour": dict(analyzer.commit_hours),
        "commits_by_day": dict(analyzer.commit_days),
        "commit_by_weekday_hour": {wd: dict(hours) for wd, hours in analyzer.commit_weekdays_hours.items()},
        "lines_by_language": {lang: dict(st) for lang, st in analyzer.lines_by_language.items()},
        "lines_by_month": lines_by_month,
        "analysis_metadata": analyzer.metadata.to_dict(),
    }


def to_json(data: object, pretty: bool = True) -> str:
    if pretty:
        return json.dumps(data, indent=2, sort_keys=False)
    return json.dumps(data, separators=(",", ":"), sort_keys=False)


def write_stats(path: Path, data: object, pretty: bool = True) -> None:
    ensure_dir(path.parent)
    path.write_text(to_json(data, pretty=pretty) + "\n", encoding="utf-8")
