"""Cron entry point for the auto punch-in job.

    */2 * * * * cd /srv/timeclock && python scripts/run_auto_punch_in.py
"""
from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock.timeclock.common.logging_utils import configure_logging
from src.timeclock.timeclock.container import build_container_from_settings


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container_from_settings(settings)
    summary = container.auto_punch_in_job.run()
    print(json.dumps(summary.to_dict(), indent=2))
    return 1 if summary.failed_count else 0


if __name__ == "__main__":
    sys.exit(main())
