#!/usr/bin/env python
"""
Rebuild consolidated scam groups from the stored scam reports.

Drops every group and report link, then replays all reports oldest first.

Can be run via:
- Manual: python scripts/rebuild_consolidation.py
- Preview: python scripts/rebuild_consolidation.py --dry-run

Options:
    --dry-run: Compute the rebuilt counts without keeping the changes
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from models.exceptions import StorageException  # noqa: E402
from repositories.database import SessionLocal  # noqa: E402
from services import ConsolidationService  # noqa: E402


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the consolidation rebuild."""
    parser = argparse.ArgumentParser(
        description="Rebuild consolidated scam groups from scam reports"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the rebuilt counts without keeping the changes",
    )
    args = parser.parse_args(argv)

    db: Session = SessionLocal()
    try:
        summary = ConsolidationService.rebuild(db, dry_run=args.dry_run)
    except StorageException as e:
        logger.error(f"Consolidation rebuild failed: {e.message}")
        return 1
    finally:
        db.close()

    prefix = "[DRY RUN] " if summary.dry_run else ""
    logger.info(
        f"{prefix}Replayed {summary.reports_replayed} reports into "
        f"{summary.groups_created} groups ({summary.reports_skipped} skipped, "
        f"{summary.verified_groups} verified)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
