"""
Wellness Report Export
======================
Standalone orchestrator. Run on demand (or from cron) to:
  1. (Optional) Ensure the habit tracker tables exist
  2. Load every daily log from PostgreSQL
  3. Build the weekly or monthly wellness report
  4. Write it to wellness-report-<period>-<date>.txt

Usage:
    python export_report.py                         # Weekly report, cwd
    python export_report.py --period month          # Monthly report
    python export_report.py --output-dir reports/   # Custom directory
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger("export_report")

from constants import REPORT_PERIODS
from pipeline.migrations import ensure_startup_schema
from pipeline.report_builder import build_wellness_report, report_filename
from routes.helpers import _load_entries, _within_days


class ReportExporter:
    """Load logs, render one report period, write it to disk."""

    def __init__(self, period: str = "week", output_dir: str = ".", today: Optional[date] = None):
        if period not in REPORT_PERIODS:
            raise ValueError(f"Unknown report period: {period!r}")
        self.period = period
        self.output_dir = Path(output_dir)
        self.today = today or date.today()

    def run(self, migrate: bool = False) -> Optional[Path]:
        """Return the written path, or None when the period has no logs."""
        if migrate:
            log.info("Step 0/3: Running startup migrations...")
            ensure_startup_schema()

        log.info("Step 1/3: Loading daily logs...")
        entries = _load_entries()
        days = REPORT_PERIODS[self.period][2]
        period_entries = _within_days(entries, days, today=self.today)
        log.info("   %d logs total, %d in the last %d days", len(entries), len(period_entries), days)
        if not period_entries:
            log.warning("No data available for the selected period (%s)", self.period)
            return None

        log.info("Step 2/3: Building %s report...", self.period)
        text = build_wellness_report(self.period, period_entries, entries, generated=self.today)

        log.info("Step 3/3: Writing report...")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / report_filename(self.period, self.today)
        path.write_text(text, encoding="utf-8")
        log.info("Report written to %s", path)
        return path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Export a wellness report")
    parser.add_argument("--period", choices=sorted(REPORT_PERIODS), default="week",
                        help="Report period (default: week)")
    parser.add_argument("--output-dir", default=".",
                        help="Directory to write the report into (default: cwd)")
    parser.add_argument("--migrate", action="store_true",
                        help="Create tables first if they are missing")
    args = parser.parse_args(argv)

    try:
        path = ReportExporter(args.period, args.output_dir).run(migrate=args.migrate)
    except Exception as e:
        log.error("Report export failed: %s", e)
        return 1
    return 0 if path else 1


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    sys.exit(main())
