#!/usr/bin/env python3
"""
export_report.py - Write the progress report as a standalone HTML file.

Reads the lesson history from the progress store, recomputes the stats and
renders the same report the dashboard offers for download.

Usage:
  python scripts/export_report.py
  python scripts/export_report.py --db ~/.algebro/progress.db --output report.html
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from algebro.classroom import ProgressStore, compute_stats
from algebro.config import DEFAULT_STORE_DB, LOG_FORMAT
from algebro.viewer import render_progress_report

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT
)
logger = logging.getLogger(__name__)


def export_report(db_path: Path, output_path: Path, today: Optional[date] = None) -> Path:
    """
    Render the report for the store at `db_path` into `output_path`.

    Returns:
        The written path
    """
    today = today or date.today()
    store = ProgressStore(db_path)
    progress = store.load_progress()
    stats = compute_stats(progress.records, today)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(render_progress_report(progress, stats, generated_on=today))

    logger.info(
        f"Wrote report for {stats.lessons_completed} lessons "
        f"(streak {stats.current_streak}, best {stats.longest_streak}) to {output_path}"
    )
    return output_path


def main():
    parser = argparse.ArgumentParser(
        description="Export the Alge-Bro progress report as HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_STORE_DB,
        help=f"Path to progress database (default: {DEFAULT_STORE_DB})"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("algebro_progress_report.html"),
        help="Output HTML file"
    )
    args = parser.parse_args()

    if not args.db.exists():
        logger.warning(f"No progress database at {args.db}; exporting an empty report")

    export_report(args.db, args.output)


if __name__ == "__main__":
    main()
