from __future__ import annotations

import hmac
import logging
from functools import wraps

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def job_token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            expected = current_app.config.get("JOB_TOKEN")
            if expected:
                given = request.headers.get("X-Job-Token", "")
                if not hmac.compare_digest(given, expected):
                    return jsonify({"error": "Unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _optional_date(payload: dict, key: str = "date"):
        value = payload.get(key)
        if not value:
            return None
        try:
            return parse_iso_date(str(value))
        except ValueError as e:
            raise ValidationError(f"{key} must be YYYY-MM-DD") from e

    @app.route("/api/jobs/auto-punch-in", methods=["POST"], endpoint="job_auto_punch_in")
    @job_token_required
    def job_auto_punch_in():
        try:
            summary = container.auto_punch_in_job.run(now=container.clock())
        except Exception as e:
            logger.exception("Error in auto punch-in job")
            return jsonify({"error": str(e)}), 500
        return jsonify({"message": "Auto punch-in processing complete", **summary.to_dict()})

    @app.route("/api/jobs/auto-punch-out", methods=["POST"], endpoint="job_auto_punch_out")
    @job_token_required
    def job_auto_punch_out():
        payload = request.get_json(silent=True) or {}
        try:
            target_date = _optional_date(payload)
            summary = container.auto_punch_out_job.run(
                now=container.clock(), target_date=target_date, force=bool(payload.get("force"))
            )
        except DomainError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Error in auto punch-out job")
            return jsonify({"error": str(e)}), 500
        return jsonify({"message": "Auto punch-out processing complete", **summary.to_dict()})

    @app.route("/api/jobs/normalize", methods=["POST"], endpoint="job_normalize")
    @job_token_required
    def job_normalize():
        payload = request.get_json(silent=True) or {}
        try:
            work_date = _optional_date(payload) or container.converter.local_date(container.clock())
            summary = container.normalizer.normalize(work_date)
        except DomainError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Error in normalize job")
            return jsonify({"error": str(e)}), 500
        return jsonify({"message": "Time entry normalization complete", **summary.to_dict()})
