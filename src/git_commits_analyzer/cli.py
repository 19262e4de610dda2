from __future__ import annotations

import sys

from . import analysis_cli
from .config import ConfigError


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        return analysis_cli.main(argv)
    except ConfigError as e:
        print(f"git-commits-analyzer: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
