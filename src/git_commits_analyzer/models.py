from __future__ import annotations

import dataclasses
import datetime as dt


@dataclasses.dataclass(frozen=True)
class Commit:
    sha: str
    author_email: str
    author_date: dt.datetime  # author's own UTC offset
    commit_date: dt.datetime  # committer's own UTC offset


@dataclasses.dataclass(frozen=True)
class TreeEntry:
    mode: str
    type: str  # blob | tree | commit
    sha: str

    @property
    def is_submodule(self) -> bool:
        return self.type == "commit"

    @property
    def is_symlink(self) -> bool:
        return self.type == "blob" and self.mode == "120000"


@dataclasses.dataclass(frozen=True)
class Patch:
    file: str
    body: str  # hunk lines only, without the ---/+++ header lines


@dataclasses.dataclass
class LineCounts:
    added: int = 0
    deleted: int = 0

    @property
    def changed(self) -> int:
        return self.added + self.deleted


@dataclasses.dataclass
class AnalysisMetadata:
    started_at: int = 0  # epoch seconds
    repositories_analyzed: int = 0
    ms_spent: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "started_at": int(self.started_at),
            "repositories_analyzed": int(self.repositories_analyzed),
            "ms_spent": int(self.ms_spent),
        }


@dataclasses.dataclass
class RepoRun:
    path: str
    ms_spent: int = 0
    commits_matched: int = 0
    files_skipped: dict[str, int] = dataclasses.field(default_factory=dict)  # reason -> count
    errors: list[str] = dataclasses.field(default_factory=list)
