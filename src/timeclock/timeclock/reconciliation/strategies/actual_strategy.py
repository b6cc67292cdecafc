from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import elapsed_minutes
from ...core.enums import RecordSource
from ...shifts.model import Shift
from ..model import DayPunches, ReconciledDay
from .base import ReconciliationStrategy, lunch_minutes_for


class ActualPairStrategy(ReconciliationStrategy):
    """Complete punch pair: punch times are used verbatim."""

    def reconcile(self, *, work_date: date, shift: Optional[Shift], punches: DayPunches, now: datetime) -> ReconciledDay:
        start = punches.punch_in.timestamp
        end = punches.punch_out.timestamp
        total = elapsed_minutes(start, end)
        return ReconciledDay(
            work_date=work_date,
            punch_in=start,
            punch_out=end,
            total_minutes=total,
            lunch_minutes=lunch_minutes_for(total),
            source=RecordSource.ACTUAL,
            shift_id=shift.shift_id if shift else None,
        )


class OngoingStrategy(ReconciliationStrategy):
    """Clocked in on the running day and not out yet: measured up to ``now``."""

    def reconcile(self, *, work_date: date, shift: Optional[Shift], punches: DayPunches, now: datetime) -> ReconciledDay:
        start = punches.punch_in.timestamp
        total = elapsed_minutes(start, now)
        return ReconciledDay(
            work_date=work_date,
            punch_in=start,
            punch_out=None,
            total_minutes=total,
            lunch_minutes=lunch_minutes_for(total),
            source=RecordSource.ACTUAL,
            is_ongoing=True,
            shift_id=shift.shift_id if shift else None,
        )


class PartialPunchStrategy(ReconciliationStrategy):
    """A lone punch-in on an earlier day with nothing scheduled."""

    def reconcile(self, *, work_date: date, shift: Optional[Shift], punches: DayPunches, now: datetime) -> ReconciledDay:
        return ReconciledDay(
            work_date=work_date,
            punch_in=punches.punch_in.timestamp,
            punch_out=None,
            total_minutes=0,
            lunch_minutes=0,
            source=RecordSource.ACTUAL,
        )
