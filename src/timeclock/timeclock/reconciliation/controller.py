from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/days", methods=["GET"], endpoint="employee_days")
    def employee_days(employee_id: str):
        now = container.clock()
        today = container.converter.local_date(now)
        try:
            start = parse_iso_date(request.args.get("start") or (today - timedelta(days=6)).strftime("%Y-%m-%d"))
            end = parse_iso_date(request.args.get("end") or today.strftime("%Y-%m-%d"))
        except ValueError:
            return jsonify({"error": "start/end must be YYYY-MM-DD"}), 400

        try:
            days = container.reconciliation_service.reconcile_range(employee_id, start, end, now=now)
        except DomainError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error reconciling days for employee %s", employee_id)
            return jsonify({"error": "Internal error"}), 500

        return jsonify(
            {
                "employee_id": employee_id,
                "start": start.strftime("%Y-%m-%d"),
                "end": end.strftime("%Y-%m-%d"),
                "days": [d.to_dict() for d in days],
            }
        )
