from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import elapsed_minutes
from ...core.enums import RecordSource
from ...shifts.model import Shift
from ..model import DayPunches, ReconciledDay
from .base import ReconciliationStrategy, lunch_minutes_for


class ScheduleStrategy(ReconciliationStrategy):
    """Scheduled shift used verbatim; any partial punch data is ignored."""

    def reconcile(self, *, work_date: date, shift: Optional[Shift], punches: DayPunches, now: datetime) -> ReconciledDay:
        total = elapsed_minutes(shift.start_time, shift.end_time)
        return ReconciledDay(
            work_date=work_date,
            punch_in=shift.start_time,
            punch_out=shift.end_time,
            total_minutes=total,
            lunch_minutes=lunch_minutes_for(total),
            source=RecordSource.SCHEDULE,
            shift_id=shift.shift_id,
        )
