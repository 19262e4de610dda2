from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Iterable, Optional

from .analysis_diff import count_lines, parse_patches
from .analysis_ignore import StatsIgnore
from .analysis_paths import classify_path, is_library
from .analysis_periods import WEEKDAYS, day_key, month_key, weekday_abbr
from .git import GitError, GitRepo
from .models import AnalysisMetadata, Commit, RepoRun

logger = logging.getLogger(__name__)


class CommitsAnalyzer:
    """
    Accumulates commit, time-of-day and per-language line statistics for a set
    of authors across any number of repositories.

    One instance owns all running totals; call `parse_repo` once per repository
    and hand the instance to `analysis_write.format_stats` at the end.
    """

    def __init__(self, authors: Iterable[str], *, started_at: Optional[int] = None) -> None:
        if isinstance(authors, str):
            raise TypeError("authors must be a collection of emails, not a single string")
        self.authors = frozenset(a for a in authors if a)
        if not self.authors:
            raise ValueError("at least one author email is required")

        self.commits_total = 0
        self.commits_by_month: dict[str, int] = defaultdict(int)  # YYYY-MM -> commits
        self.commit_hours: dict[int, int] = {h: 0 for h in range(24)}
        self.commit_days: dict[str, int] = defaultdict(int)  # YYYY-MM-DD -> commits
        self.commit_weekdays_hours: dict[str, dict[int, int]] = {wd: {h: 0 for h in range(24)} for wd in WEEKDAYS}
        self.lines_by_language: dict[str, dict[str, int]] = {}  # language -> {added,deleted,commits}
        self.lines_by_month: dict[str, dict[str, int]] = {}  # YYYY-MM -> {added,deleted}
        self.metadata = AnalysisMetadata(started_at=int(time.time()) if started_at is None else int(started_at))

    def is_author(self, commit: Commit) -> bool:
        return commit.author_email in self.authors

    def parse_repo(self, repo: GitRepo, ignore: Optional[StatsIgnore] = None) -> RepoRun:
        parse_start = time.monotonic()
        run = RepoRun(path=str(repo.path))
        skipped: dict[str, int] = defaultdict(int)

        for commit in repo.log_commits():
            if not self.is_author(commit):
                continue
            self.apply_commit(repo, commit, ignore=ignore, skipped=skipped, errors=run.errors)
            run.commits_matched += 1

        run.files_skipped = dict(skipped)
        run.ms_spent = int((time.monotonic() - parse_start) * 1000.0)
        self.metadata.repositories_analyzed += 1
        self.metadata.ms_spent += run.ms_spent
        return run

    def apply_commit(
        self,
        repo: GitRepo,
        commit: Commit,
        *,
        ignore: Optional[StatsIgnore] = None,
        skipped: Optional[dict[str, int]] = None,
        errors: Optional[list[str]] = None,
    ) -> None:
        if skipped is None:
            skipped = defaultdict(int)
        if errors is None:
            errors = []

        # Both lookups may raise; nothing is counted until they succeed.
        diff = repo.show_diff(commit.sha)
        tree = repo.list_tree(commit.sha)
        commit_month = month_key(commit.commit_date)

        languages_in_commit: set[str] = set()
        for patch in parse_patches(diff):
            entry = tree.get(patch.file)
            if entry is not None and entry.is_submodule:
                skipped["submodule"] += 1
                continue
            if entry is not None and entry.is_symlink:
                skipped["symlink"] += 1
                continue
            if ignore is not None and ignore.matches(patch.file):
                skipped["ignored"] += 1
                continue
            if is_library(patch.file):
                skipped["library"] += 1
                continue

            def fetch_content(sha: str = commit.sha, path: str = patch.file) -> str:
                try:
                    return repo.read_blob(sha, path)
                except GitError as e:
                    errors.append(f"{sha[:12]} {path}: {e}")
                    raise

            result = classify_path(patch.file, fetch_content)
            if not result.is_language:
                skipped[result.kind.value] += 1
                continue

            language = result.language
            lang_stats = self.lines_by_language.setdefault(language, {"added": 0, "deleted": 0, "commits": 0})
            month_stats = self.lines_by_month.setdefault(commit_month, {"added": 0, "deleted": 0})
            counts = count_lines(patch.body)
            lang_stats["added"] += counts.added
            lang_stats["deleted"] += counts.deleted
            month_stats["added"] += counts.added
            month_stats["deleted"] += counts.deleted
            languages_in_commit.add(language)

        for language in languages_in_commit:
            self.lines_by_language[language]["commits"] += 1

        # Hour, day and weekday come from the author date, the month from the
        # commit date.
        authored = commit.author_date
        self.commit_hours[authored.hour] += 1
        self.commit_days[day_key(authored)] += 1
        self.commit_weekdays_hours[weekday_abbr(authored)][authored.hour] += 1
        self.commits_by_month[commit_month] += 1
        self.commits_total += 1
        logger.debug("%s: %d language(s) touched", commit.sha[:12], len(languages_in_commit))
