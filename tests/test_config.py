from __future__ import annotations

import json
from pathlib import Path

import pytest

from git_commits_analyzer.analysis_cli import _build_parser
from git_commits_analyzer.config import ConfigError, load_config, read_ignore_file, resolve_settings


def _settings(argv: list[str], config: dict | None = None):
    args = _build_parser().parse_args(argv)
    return resolve_settings(args, config or {})


def test_missing_arguments_are_reported_in_order() -> None:
    with pytest.raises(ConfigError, match="missing argument: --author"):
        _settings([])
    with pytest.raises(ConfigError, match="missing argument: --output"):
        _settings(["--author=me@example.com"])
    with pytest.raises(ConfigError, match="missing argument: --path"):
        _settings(["--author=me@example.com", "--output=/tmp/"])


def test_cli_arguments() -> None:
    s = _settings(["-a", "me@example.com", "-a", "me@work.example,me@example.com", "-o", "out", "-p", "repos", "--compact"])
    assert s.authors == ("me@example.com", "me@work.example")
    assert s.output == Path("out")
    assert s.path == Path("repos")
    assert s.pretty is False
    assert s.ignore_file is None


def test_config_values_and_overrides() -> None:
    config = {
        "authors": ["cfg@example.com"],
        "path": "cfg-repos",
        "output": "cfg-out",
        "ignore_file": "cfg.ignore",
        "pretty": False,
    }
    s = _settings([], config)
    assert s.authors == ("cfg@example.com",)
    assert s.path == Path("cfg-repos")
    assert s.ignore_file == Path("cfg.ignore")
    assert s.pretty is False

    s = _settings(["--author", "cli@example.com", "--path", "cli-repos"], config)
    assert s.authors == ("cli@example.com",)
    assert s.path == Path("cli-repos")
    assert s.output == Path("cfg-out")


def test_load_config(tmp_path: Path) -> None:
    assert load_config(tmp_path / "missing.json") == {}
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"authors": ["me@example.com"]}) + "\n", encoding="utf-8")
    assert load_config(p) == {"authors": ["me@example.com"]}


def test_read_ignore_file(tmp_path: Path) -> None:
    assert read_ignore_file(None) is None
    with pytest.raises(ConfigError):
        read_ignore_file(tmp_path / "nope")
    p = tmp_path / "ignore"
    p.write_text("/vendor\n", encoding="utf-8")
    assert read_ignore_file(p) == "/vendor\n"
