from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..business_hours.model import BusinessHours
from ..business_hours.resolver import BusinessHoursResolver
from ..common.timezone import TimeZoneConverter
from ..core.constants import OVERNIGHT_PUNCH_OUT_TOLERANCE_MINUTES
from ..core.enums import EntryType
from ..punches.model import PunchEvent
from ..shifts.model import Shift
from .factory import ReconciliationStrategyFactory
from .model import DayPunches, ReconciledDay


def _chronological(event: PunchEvent):
    return event.timestamp, event.entry_id


def select_day_punches(events: Sequence[PunchEvent]) -> DayPunches:
    """Reduce one day's events to the pair reconciliation works with.

    The day's first punch-in starts the record. It only counts as finished
    when the day's latest event is a punch-out, so out-of-order sequences are
    judged by their latest entry alone.
    """
    ordered = sorted(events, key=_chronological)
    punch_ins = [e for e in ordered if e.entry_type == EntryType.PUNCH_IN]
    if not punch_ins:
        return DayPunches()

    first_in = punch_ins[0]
    latest = ordered[-1]
    if latest.entry_type == EntryType.PUNCH_OUT and latest.timestamp >= first_in.timestamp:
        return DayPunches(punch_in=first_in, punch_out=latest)
    return DayPunches(punch_in=first_in)


def take_overnight_punch_out(
    day_events: Sequence[PunchEvent],
    next_day_events: Sequence[PunchEvent],
    cutoff: Optional[datetime],
) -> Optional[PunchEvent]:
    """The next day's punch-out that ends this day's open punch-in, if any.

    Only the next day's first event qualifies, and only when it is a punch-out
    no later than ``cutoff``.
    """
    if cutoff is None or not day_events or not next_day_events:
        return None
    last = max(day_events, key=_chronological)
    first_next = min(next_day_events, key=_chronological)
    if last.entry_type != EntryType.PUNCH_IN or first_next.entry_type != EntryType.PUNCH_OUT:
        return None
    return first_next if first_next.timestamp <= cutoff else None


class ReconciliationEngine:
    def __init__(
        self,
        converter: TimeZoneConverter,
        resolver: BusinessHoursResolver,
        *,
        strategy_factory: ReconciliationStrategyFactory | None = None,
    ):
        self._tz = converter
        self._resolver = resolver
        self._factory = strategy_factory or ReconciliationStrategyFactory()

    def overnight_cutoff(
        self,
        *,
        work_date: date,
        shift: Optional[Shift],
        hours: Optional[BusinessHours],
    ) -> Optional[datetime]:
        """Latest instant a next-day punch-out may still belong to ``work_date``.

        None unless the day's business window or its shift runs past midnight.
        """
        _, day_end = self._tz.day_bounds(work_date)
        ends = []
        overnight = self._resolver.overnight_close(hours, work_date)
        if overnight is not None:
            ends.append(overnight)
        if shift and shift.end_time > day_end:
            ends.append(shift.end_time)
        if not ends:
            return None
        return max(ends) + timedelta(minutes=OVERNIGHT_PUNCH_OUT_TOLERANCE_MINUTES)

    def reconcile_day(
        self,
        *,
        work_date: date,
        shift: Optional[Shift],
        events: Sequence[PunchEvent],
        hours: Optional[BusinessHours],
        now: datetime,
    ) -> ReconciledDay:
        punches = select_day_punches(events)
        today = self._tz.local_date(now)
        closed = self._resolver.has_closed(hours, work_date, now)
        # Yesterday stays current while its overnight window is open.
        is_current = work_date == today or (work_date < today and not closed)

        strategy = self._factory.for_day(punches=punches, shift=shift, is_current=is_current, business_closed=closed)
        return strategy.reconcile(work_date=work_date, shift=shift, punches=punches, now=now)
