from __future__ import annotations

import re

from .models import LineCounts, Patch

_NEW_FILE_RE = re.compile(r"^\+\+\+ (?P<file>\"b/.+\"|b/.+?)\t?$")
_C_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13, "\"": 34, "\\": 92}
_BODY_RE = re.compile(r"^[ @+\-\\]")
_WHITESPACE_ONLY_RE = re.compile(r"^[+-]\s+$")


def _unquote_c(quoted: str) -> str:
    """Undo git's C-style quoting of a path (`"dir/a\\"b"`, octal escapes)."""
    out = bytearray()
    s = quoted[1:-1]
    i = 0
    while i < len(s):
        ch = s[i]
        if ch != "\\" or i + 1 >= len(s):
            out += ch.encode("utf-8")
            i += 1
            continue
        nxt = s[i + 1]
        if nxt in _C_ESCAPES:
            out.append(_C_ESCAPES[nxt])
            i += 2
        elif re.match(r"[0-7]{3}", s[i + 1 : i + 4]):
            out.append(int(s[i + 1 : i + 4], 8) & 0xFF)
            i += 4
        else:
            out += nxt.encode("utf-8")
            i += 2
    return out.decode("utf-8", errors="replace")


def _header_path(raw: str) -> str:
    # Paths with spaces get a trailing TAB in the header; odd characters get quoted.
    if raw.startswith('"'):
        raw = _unquote_c(raw)
    return raw[len("b/") :]


def parse_patches(diff: str) -> list[Patch]:
    """
    Split unified diff output (as printed by `git show`) into one Patch per file.

    Only the hunk region is kept in each body. Files without a `+++ b/` header,
    i.e. deletions, binary files and mode-only changes, yield no patch.
    """
    patches: list[Patch] = []
    file_name = ""
    body: list[str] = []
    in_body = False

    def flush() -> None:
        if file_name and body:
            patches.append(Patch(file=file_name, body="\n".join(body) + "\n"))

    for raw in diff.split("\n"):
        if raw.startswith("diff"):
            flush()
            file_name = ""
            body = []
            in_body = False
            continue
        if raw.startswith("---") and not in_body:
            continue
        m = _NEW_FILE_RE.match(raw)
        if m and not in_body:
            file_name = _header_path(m.group("file"))
            in_body = True
            continue
        if in_body and _BODY_RE.match(raw):
            body.append(raw)
    flush()
    return patches


def count_lines(body: str) -> LineCounts:
    counts = LineCounts()
    for line in body.split("\n"):
        if not line or line[0] not in "+-":
            continue
        if _WHITESPACE_ONLY_RE.match(line):
            continue
        if line[0] == "+":
            counts.added += 1
        else:
            counts.deleted += 1
    return counts
