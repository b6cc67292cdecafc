from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import RecordSource
from ...shifts.model import Shift
from ..model import DayPunches, ReconciledDay
from .base import ReconciliationStrategy


class EmptyDayStrategy(ReconciliationStrategy):
    """Nothing scheduled and nothing punched."""

    def reconcile(self, *, work_date: date, shift: Optional[Shift], punches: DayPunches, now: datetime) -> ReconciledDay:
        return ReconciledDay(
            work_date=work_date,
            punch_in=None,
            punch_out=None,
            total_minutes=0,
            lunch_minutes=0,
            source=RecordSource.NONE,
        )
