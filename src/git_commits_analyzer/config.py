from __future__ import annotations

import argparse
import dataclasses
import json
from pathlib import Path
from typing import Optional


class ConfigError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class Settings:
    path: Path
    authors: tuple[str, ...]
    output: Path
    ignore_file: Optional[Path] = None
    pretty: bool = True


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    return json.loads(config_path.read_text(encoding="utf-8"))


def split_csv_args(values: list[str]) -> list[str]:
    out: list[str] = []
    for v in values:
        for part in str(v).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


def resolve_settings(args: argparse.Namespace, config: dict) -> Settings:
    """
    Merge command-line arguments over config.json values.

    Raises ConfigError naming the first missing option, before any repository
    is touched.
    """
    authors = split_csv_args(list(getattr(args, "authors", None) or []))
    if not authors:
        authors = split_csv_args([str(a) for a in (config.get("authors") or [])])
    # Keep first occurrence order, drop duplicates.
    authors = list(dict.fromkeys(authors))

    output = getattr(args, "output", None) or config.get("output") or None
    path = getattr(args, "path", None) or config.get("path") or None
    ignore_file = getattr(args, "ignore_file", None) or config.get("ignore_file") or None

    if getattr(args, "compact", False):
        pretty = False
    else:
        pretty = bool(config.get("pretty", True))

    if not authors:
        raise ConfigError("missing argument: --author")
    if not output:
        raise ConfigError("missing argument: --output")
    if not path:
        raise ConfigError("missing argument: --path")

    return Settings(
        path=Path(path),
        authors=tuple(authors),
        output=Path(output),
        ignore_file=Path(ignore_file) if ignore_file else None,
        pretty=pretty,
    )


def read_ignore_file(path: Optional[Path]) -> Optional[str]:
    if path is None:
        return None
    if not path.exists():
        raise ConfigError(f"ignore file not found: {path}")
    return path.read_text(encoding="utf-8", errors="replace")
