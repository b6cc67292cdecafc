"""Cron entry point for the auto punch-out job.

    */5 * * * * cd /srv/timeclock && python scripts/run_auto_punch_out.py

Re-normalize one day by hand:

    python scripts/run_auto_punch_out.py --date 2024-05-06 --force
"""
from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock.timeclock.common.datetime_utils import parse_iso_date
from src.timeclock.timeclock.common.logging_utils import configure_logging
from src.timeclock.timeclock.container import build_container_from_settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Punch out employees at business closing time.")
    parser.add_argument("--date", type=parse_iso_date, default=None, help="Day to normalize (YYYY-MM-DD)")
    parser.add_argument("--force", action="store_true", help="Normalize the day even if nobody was punched out")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container_from_settings(settings)
    summary = container.auto_punch_out_job.run(target_date=args.date, force=args.force)
    print(json.dumps(summary.to_dict(), indent=2))
    return 1 if summary.failed_count else 0


if __name__ == "__main__":
    sys.exit(main())
