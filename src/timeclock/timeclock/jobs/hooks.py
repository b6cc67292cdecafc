from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Protocol

import requests

from ..core.constants import DEFAULT_HOOK_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class PunchInHook(Protocol):
    """Side effect fired after a successful automatic punch-in
    (e.g. the daily equipment temperature check)."""

    def trigger(self, *, employee_id: str, timestamp: datetime) -> None:
        raise NotImplementedError


class NullPunchInHook(PunchInHook):
    def trigger(self, *, employee_id: str, timestamp: datetime) -> None:
        logger.debug("No punch-in hook configured; skipping for employee %s", employee_id)


class HttpPunchInHook(PunchInHook):
    """POSTs ``{"employee_id", "timestamp"}`` as JSON to a configured URL."""

    def __init__(self, url: str, *, timeout: float = DEFAULT_HOOK_TIMEOUT_SECONDS, token: Optional[str] = None):
        self._url = url
        self._timeout = float(timeout)
        self._token = token

    def trigger(self, *, employee_id: str, timestamp: datetime) -> None:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        response = requests.post(
            self._url,
            json={"employee_id": employee_id, "timestamp": timestamp.isoformat()},
            headers=headers,
            timeout=self._timeout,
        )
        response.raise_for_status()


def build_punch_in_hook(url: Optional[str], *, timeout: float = DEFAULT_HOOK_TIMEOUT_SECONDS, token: Optional[str] = None) -> PunchInHook:
    if url:
        return HttpPunchInHook(url, timeout=timeout, token=token)
    return NullPunchInHook()
