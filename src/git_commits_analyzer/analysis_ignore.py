from __future__ import annotations

import dataclasses
import re
from typing import Optional

IGNORE_FILENAME = ".gitstatsignore"


def compile_pattern(line: str) -> str:
    p = line.strip().replace("\\", "/")
    # `*` stays within one path segment.
    p = "[^/]+".join(re.escape(part) for part in p.split("*"))
    if p.startswith("/"):
        p = "^" + p
    else:
        p = "^.*/" + p
    if not p.endswith("/"):
        p = p + "(?:/|$)"
    return p


def compile_patterns(content: Optional[str]) -> list[str]:
    """
    Translate the lines of a .gitstatsignore file into regular expressions.

    Blank lines and lines starting with `#` are skipped. A leading `/` anchors
    the pattern at the repository root; other patterns match at any depth.
    Patterns match a file or directory of that name and anything beneath it.
    """
    if not content:
        return []
    out: list[str] = []
    for raw in re.split(r"[\r\n]+", content):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        out.append(compile_pattern(line))
    return out


def normalize_repo_path(path: str) -> str:
    p = path.replace("\\", "/")
    if not p.startswith("/"):
        p = "/" + p
    return p


@dataclasses.dataclass(frozen=True)
class StatsIgnore:
    patterns: tuple[str, ...] = ()

    @classmethod
    def from_content(cls, content: Optional[str]) -> "StatsIgnore":
        return cls(tuple(compile_patterns(content)))

    def merged(self, other: "StatsIgnore") -> "StatsIgnore":
        return StatsIgnore(self.patterns + other.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, path: str) -> bool:
        p = normalize_repo_path(path)
        for pattern in self.patterns:
            if re.search(pattern, p):
                return True
        return False
