from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .analysis_run import run_analysis
from .config import load_config, resolve_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="git-commits-analyzer", description="Aggregate commit and per-language line stats for a set of authors.")
    parser.add_argument("-p", "--path", type=Path, default=None, help="Directory to search for git repositories under.")
    parser.add_argument(
        "-a",
        "--author",
        dest="authors",
        action="append",
        default=[],
        metavar="EMAIL",
        help="Include this author email in statistics (repeatable, or comma-separated).",
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="Directory to write collected data to.")
    parser.add_argument(
        "--ignore-file",
        type=Path,
        default=None,
        help="A .gitstatsignore-style file applied to every repository (in addition to each repo's own).",
    )
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    parser.add_argument("--compact", action="store_true", help="Write compact JSON instead of indented JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")
    return parser


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    settings = resolve_settings(args, config)
    return run_analysis(settings=settings)
