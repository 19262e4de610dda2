from __future__ import annotations

import datetime as dt
import subprocess
from pathlib import Path
from typing import Iterator, Optional

from .models import Commit, TreeEntry

LOG_FORMAT = "%H%x09%ae%x09%aI%x09%cI"


class GitError(RuntimeError):
    def __init__(self, args: list[str], code: int, stderr: str) -> None:
        self.git_args = list(args)
        self.code = code
        self.stderr = stderr
        super().__init__(f"git {' '.join(args)} exited {code}: {stderr.strip()[:500]}")


class RepositoryError(GitError):
    pass


def run_git(args: list[str], cwd: Path, timeout_s: Optional[int] = None) -> tuple[int, str, str]:
    # Output is decoded permissively: history may contain any bytes.
    proc = subprocess.run(
        ["git", "-c", "core.quotePath=false", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def check_git(args: list[str], cwd: Path) -> str:
    code, out, err = run_git(args, cwd=cwd)
    if code != 0:
        raise GitError(args, code, err)
    return out


def is_git_repo(path: Path) -> bool:
    # Working copy (`.git` directory) or bare/mirror clone (`HEAD` file).
    return (path / ".git").is_dir() or (path / "HEAD").is_file()


def discover_git_repos(root: Path) -> list[Path]:
    """Return the immediate subdirectories of `root` holding a repository."""
    repos: list[Path] = []
    for child in sorted(root.iterdir()):
        if child.is_dir() and is_git_repo(child):
            repos.append(child)
    return repos


def _parse_iso(value: str) -> dt.datetime:
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return dt.datetime.fromisoformat(s)


def parse_log_line(line: str) -> Optional[Commit]:
    parts = line.rstrip("\n").split("\t")
    if len(parts) != 4:
        return None
    sha, email, author_iso, commit_iso = parts
    try:
        author_date = _parse_iso(author_iso)
        commit_date = _parse_iso(commit_iso)
    except ValueError:
        return None
    return Commit(sha=sha, author_email=email, author_date=author_date, commit_date=commit_date)


def parse_ls_tree(output: str) -> dict[str, TreeEntry]:
    entries: dict[str, TreeEntry] = {}
    for record in output.split("\0"):
        if not record:
            continue
        info, sep, path = record.partition("\t")
        if not sep:
            continue
        fields = info.split()
        if len(fields) != 3:
            continue
        mode, kind, sha = fields
        entries[path] = TreeEntry(mode=mode, type=kind, sha=sha)
    return entries


class GitRepo:
    """Read-only access to one repository through the `git` executable."""

    def __init__(self, path: Path, bare: bool) -> None:
        self.path = path
        self.bare = bare

    def __repr__(self) -> str:
        return f"GitRepo({str(self.path)!r}, bare={self.bare})"

    def has_commits(self) -> bool:
        code, _, _ = run_git(["rev-parse", "--verify", "--quiet", "HEAD"], cwd=self.path)
        return code == 0

    def log_commits(self) -> Iterator[Commit]:
        if not self.has_commits():
            return
        # No count limit: the whole history reachable from HEAD.
        out = check_git(["log", f"--format={LOG_FORMAT}"], cwd=self.path)
        for line in out.splitlines():
            if not line.strip():
                continue
            commit = parse_log_line(line)
            if commit is not None:
                yield commit

    def show_diff(self, sha: str) -> str:
        return check_git(["show", "--format=", "--no-color", "--no-ext-diff", sha], cwd=self.path)

    def list_tree(self, sha: str) -> dict[str, TreeEntry]:
        return parse_ls_tree(check_git(["ls-tree", "-r", "-z", sha], cwd=self.path))

    def read_blob(self, sha: str, path: str) -> str:
        return check_git(["show", f"{sha}:{path}"], cwd=self.path)


def open_repository(path: Path) -> GitRepo:
    if (path / ".git").is_dir():
        repo = GitRepo(path, bare=False)
    elif (path / "HEAD").is_file():
        repo = GitRepo(path, bare=True)
    else:
        raise RepositoryError(["open", str(path)], 128, f"not a git repository: {path}")

    code, _, err = run_git(["rev-parse", "--git-dir"], cwd=path)
    if code != 0:
        raise RepositoryError(["rev-parse", "--git-dir"], code, err)
    return repo
