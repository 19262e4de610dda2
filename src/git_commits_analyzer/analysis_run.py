from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from .analysis_ignore import IGNORE_FILENAME, StatsIgnore
from .analysis_repo import CommitsAnalyzer
from .analysis_write import OUTPUT_FILENAME, format_stats, write_stats
from .config import Settings, read_ignore_file
from .git import GitError, GitRepo, discover_git_repos, is_git_repo, open_repository


def format_startup_header(*, settings: Settings, repo_count: int) -> str:
    lines = [
        "git-commits-analyzer",
        "",
        f"- Scan path: {settings.path}",
        f"- Authors: {', '.join(settings.authors)}",
        f"- Repositories found: {repo_count}",
        f"- Ignore file: {settings.ignore_file or '(none)'} (+ each repo's {IGNORE_FILENAME})",
        f"- Output: {settings.output / OUTPUT_FILENAME} ({'indented' if settings.pretty else 'compact'} JSON)",
        "",
    ]
    return "\n".join(lines)


def find_repos(path: Path) -> list[Path]:
    if is_git_repo(path):
        return [path]
    return discover_git_repos(path)


def load_repo_ignore(repo: GitRepo) -> StatsIgnore:
    try:
        content: Optional[str] = repo.read_blob("HEAD", IGNORE_FILENAME)
    except GitError:
        content = None
    return StatsIgnore.from_content(content)


def run_analysis(*, settings: Settings) -> int:
    scan_root = settings.path.resolve()
    if not scan_root.is_dir():
        print(f"Not a directory: {scan_root}", file=sys.stderr)
        return 2

    global_ignore = StatsIgnore.from_content(read_ignore_file(settings.ignore_file))
    repos = find_repos(scan_root)
    print(format_startup_header(settings=settings, repo_count=len(repos)))
    if not repos:
        print(f"No git repositories found under: {scan_root}", file=sys.stderr)
        return 2

    analyzer = CommitsAnalyzer(settings.authors)
    failures: list[str] = []

    for i, path in enumerate(repos, start=1):
        try:
            repo = open_repository(path)
            ignore = global_ignore.merged(load_repo_ignore(repo))
            run = analyzer.parse_repo(repo, ignore=ignore)
        except GitError as e:
            failures.append(str(path))
            print(f"[{i}/{len(repos)}] {path}: failed: {e}", file=sys.stderr)
            continue
        print(f"[{i}/{len(repos)}] {path}: {run.commits_matched} commits in {run.ms_spent} ms")
        for err in run.errors[:5]:
            print(f"  warning: {err}", file=sys.stderr)
        if len(run.errors) > 5:
            print(f"  ... {len(run.errors) - 5} more warnings", file=sys.stderr)

    out_path = settings.output / OUTPUT_FILENAME
    write_stats(out_path, format_stats(analyzer), pretty=settings.pretty)

    print(f"Analyzed {analyzer.metadata.repositories_analyzed}/{len(repos)} repos, {analyzer.commits_total} commits.")
    if failures:
        print(f"Failed repos: {len(failures)}", file=sys.stderr)
    print(f"Done. Stats in: {out_path}")
    return 1 if failures else 0
