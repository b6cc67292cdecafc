from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import NewPunch, PunchEvent


class PunchRepository(Protocol):
    """Access to time_entries.

    "Latest entry per employee" is always answered by a query at call time;
    implementations must not cache it between calls.
    """

    def get_latest_for_employee(self, employee_id: str) -> Optional[PunchEvent]:
        raise NotImplementedError

    def list_latest_per_employee(self, *, company_id: Optional[str] = None) -> Sequence[PunchEvent]:
        """Most recent event of every employee (optionally only those whose
        latest event belongs to ``company_id``)."""

        raise NotImplementedError

    def find_automatic_punch_in(self, *, employee_id: str, start: datetime, end: datetime) -> Optional[PunchEvent]:
        """An automatic punch-in with start <= timestamp <= end, if any."""

        raise NotImplementedError

    def list_for_employee_between(self, *, employee_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Events with start <= timestamp < end, ordered by timestamp."""

        raise NotImplementedError

    def create(self, punch: NewPunch) -> int:
        raise NotImplementedError

    def delete_for_employee_between(self, *, employee_id: str, start: datetime, end: datetime) -> int:
        """Delete events with start <= timestamp < end; returns deleted row count."""

        raise NotImplementedError
