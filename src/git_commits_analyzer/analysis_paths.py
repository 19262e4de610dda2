from __future__ import annotations

import dataclasses
import enum
import logging
import re
from typing import Callable, Optional

from .git import GitError

logger = logging.getLogger(__name__)


class ClassificationKind(str, enum.Enum):
    LANGUAGE = "language"
    EXCLUDED = "excluded"
    UNKNOWN = "unknown"


@dataclasses.dataclass(frozen=True)
class Classification:
    kind: ClassificationKind
    language: str = ""

    def __post_init__(self) -> None:
        if (self.kind is ClassificationKind.LANGUAGE) != bool(self.language):
            raise ValueError(f"invalid classification: {self.kind.value} {self.language!r}")

    @classmethod
    def of(cls, language: str) -> "Classification":
        return cls(kind=ClassificationKind.LANGUAGE, language=language)

    @property
    def is_language(self) -> bool:
        return self.kind is ClassificationKind.LANGUAGE


EXCLUDED = Classification(kind=ClassificationKind.EXCLUDED)
UNKNOWN = Classification(kind=ClassificationKind.UNKNOWN)

LIBRARY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p)
    for p in (
        r"jquery-ui-\d+\.\d+\.\d+\.custom(?:\.min)?\.js$",
        r"jquery-\d+\.\d+\.\d+(?:\.min)?\.js$",
        r"jquery\.datepick(?:\.min)?\.js$",
        r"chart\.min\.js$",
        r"jquery\.js$",
        r"jquery-loader\.js$",
        r"qunit\.js$",
        r"d3\.v3(?:\.min)?\.js$",
        r"automysqlbackup(?:_default\.conf)?$",
    )
)


def _rule(pattern: str, result: Classification, flags: int = 0) -> tuple[re.Pattern[str], Classification]:
    return re.compile(pattern, flags), result


# Checked top to bottom, first match wins.
LANGUAGE_RULES: tuple[tuple[re.Pattern[str], Classification], ...] = (
    _rule(r"\.xml$", Classification.of("XML"), re.IGNORECASE),
    _rule(r"\.go$", Classification.of("Golang"), re.IGNORECASE),
    _rule(r"\.(pl|pm|t|cgi|pod|run)$", Classification.of("Perl"), re.IGNORECASE),
    _rule(r"\.(?:rb|gemspec)$", Classification.of("Ruby")),
    _rule(r"(?:/|^)Rakefile$", Classification.of("Ruby")),
    _rule(r"\.md$", Classification.of("Markdown")),
    _rule(r"\.json$", Classification.of("JSON")),
    _rule(r"\.(yml|yaml)$", Classification.of("YAML")),
    _rule(r"\.?(perlcriticrc|githooksrc|ini|editorconfig|gitconfig)$", Classification.of("INI")),
    _rule(r"\.css$", Classification.of("CSS")),
    _rule(r"\.(tt2|html)$", Classification.of("HTML")),
    _rule(r"\.sql$", Classification.of("SQL")),
    _rule(r"\.py$", Classification.of("Python")),
    _rule(r"\.js$", Classification.of("JavaScript")),
    _rule(r"\.c$", Classification.of("C")),
    _rule(r"\.sh$", Classification.of("bash")),
    _rule(r"(bash|bash_\w+)$", Classification.of("bash")),
    _rule(
        r"\.?(SKIP|gitignore|txt|csv|vim|gitmodules|gitattributes|jshintrc|gperf|vimrc|psqlrc|inputrc"
        r"|screenrc|curlrc|wgetrc|selected_editor|dmrc|netrc)$",
        Classification.of("Text"),
    ),
    _rule(r"(?:/|^)(?:LICENSE|LICENSE-\w+)$", EXCLUDED),
    _rule(r"\.(?:0|1|VimballRecord)$", EXCLUDED),
    _rule(r"^vim/doc/tags$", EXCLUDED),
    _rule(r"(?:/|^)(?:README|MANIFEST|Changes|Gemfile|Gemfile\.lock|CHANGELOG)$", Classification.of("Text")),
)

SHEBANG_RULES: tuple[tuple[re.Pattern[str], Classification], ...] = (
    _rule(r"perl$", Classification.of("Perl")),
    _rule(r"ruby$", Classification.of("Ruby")),
    # Quirk kept as-is: a bash shebang has always been reported as Ruby.
    _rule(r"^#!/usr/bin/bash$", Classification.of("Ruby")),
)


def is_library(path: str) -> bool:
    """Vendored third-party files that should not count towards contributions."""
    return any(p.search(path) for p in LIBRARY_PATTERNS)


def language_for_path(path: str) -> Optional[Classification]:
    if path == "LICENSE":
        return EXCLUDED
    for pattern, result in LANGUAGE_RULES:
        if pattern.search(path):
            return result
    return None


def sniff_language(content: str) -> Optional[Classification]:
    first_line = content.split("\n", 1)[0]
    for pattern, result in SHEBANG_RULES:
        if pattern.search(first_line):
            return result
    return None


def fallback_language(path: str) -> Classification:
    m = re.search(r"\.([^.]+)$", path)
    if m is None:
        return Classification.of(path)
    if m.group(1) == "lock":
        return EXCLUDED
    return Classification.of(m.group(1))


def classify_path(path: str, fetch_content: Callable[[], str]) -> Classification:
    """
    Determine the language of `path`.

    Library files are excluded, then the ordered path table is consulted. When
    no rule applies, the content is fetched through `fetch_content` and its
    first line inspected; as a last resort the extension itself is the label.
    A failing fetch is logged and yields UNKNOWN.
    """
    if is_library(path):
        return EXCLUDED

    by_path = language_for_path(path)
    if by_path is not None:
        return by_path

    try:
        content = fetch_content()
    except (GitError, OSError) as e:
        logger.warning("could not read %s: %s", path, e)
        return UNKNOWN
    if not content:
        return UNKNOWN

    by_content = sniff_language(content)
    if by_content is not None:
        return by_content

    return fallback_language(path)
