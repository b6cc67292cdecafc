"""Example: use the service layer directly (no Flask).

Prints one employee's reconciled week as JSON.

    python examples/example_usage.py emp-demo-1
"""

import importlib
import json
import sys
from datetime import timedelta

from config import get_settings_module

from src.timeclock.timeclock.container import build_container_from_settings


def main():
    employee_id = sys.argv[1] if len(sys.argv) > 1 else "emp-demo-1"
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)

    today = container.converter.local_date(container.clock())
    days = container.reconciliation_service.reconcile_range(employee_id, today - timedelta(days=6), today)
    print(json.dumps([d.to_dict() for d in days], indent=2))


if __name__ == "__main__":
    main()
