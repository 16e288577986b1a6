"""Run BeAware schema migrations without the alembic CLI.

Usage:
    python scripts/migrate.py upgrade
    python scripts/migrate.py downgrade -1
    python scripts/migrate.py current
    python scripts/migrate.py stamp head
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_INI = ROOT / "alembic.ini"

DEFAULT_REVISIONS = {"upgrade": "head", "downgrade": "-1", "stamp": "head"}


def get_config() -> Config:
    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    return cfg


def run(operation: str, revision: str | None = None) -> None:
    cfg = get_config()
    if operation == "current":
        command.current(cfg, verbose=True)
        return

    target = revision or DEFAULT_REVISIONS[operation]
    getattr(command, operation)(cfg, target)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Apply BeAware database migrations")
    parser.add_argument(
        "operation", choices=["upgrade", "downgrade", "current", "stamp"]
    )
    parser.add_argument("revision", nargs="?", default=None)
    args = parser.parse_args(argv)

    run(args.operation, args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
