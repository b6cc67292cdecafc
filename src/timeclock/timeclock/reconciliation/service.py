from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from ..business_hours.model import BusinessHours
from ..business_hours.repository import CompanySettingsRepository
from ..common.datetime_utils import now_utc
from ..common.timezone import TimeZoneConverter
from ..common.validators import require_date_range, require_non_empty
from ..core.exceptions import ConfigurationError
from ..profiles.repository import ProfileRepository
from ..punches.model import PunchEvent
from ..punches.repository import PunchRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .engine import ReconciliationEngine, take_overnight_punch_out
from .model import ReconciledDay

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Use case: one ReconciledDay per calendar day for an employee's date range."""

    def __init__(
        self,
        shifts: ShiftRepository,
        punches: PunchRepository,
        profiles: ProfileRepository,
        company_settings: CompanySettingsRepository,
        engine: ReconciliationEngine,
        converter: TimeZoneConverter,
    ):
        self._shifts = shifts
        self._punches = punches
        self._profiles = profiles
        self._settings = company_settings
        self._engine = engine
        self._tz = converter

    def _business_hours_for(self, employee_id: str) -> Optional[BusinessHours]:
        profile = self._profiles.get_by_user_id(employee_id)
        if not profile or not profile.company_id:
            logger.warning("No company found for employee %s; business hours ignored", employee_id)
            return None
        try:
            return self._settings.get_business_hours(profile.company_id)
        except ConfigurationError:
            logger.exception("Unusable business hours for company %s", profile.company_id)
            return None

    def reconcile_range(
        self,
        employee_id: str,
        start: date,
        end: date,
        *,
        now: datetime | None = None,
    ) -> List[ReconciledDay]:
        employee_id = require_non_empty(employee_id, "employee_id")
        require_date_range(start, end)
        now = now or now_utc()

        range_start, _ = self._tz.day_bounds(start)
        _, range_end = self._tz.day_bounds(end)
        # One extra day so the last night of the range can pick up its punch-out.
        _, events_end = self._tz.day_bounds(end + timedelta(days=1))

        shifts_by_day: Dict[date, Shift] = {}
        for shift in self._shifts.list_starting_between(start=range_start, end=range_end, employee_id=employee_id):
            shifts_by_day.setdefault(self._tz.local_date(shift.start_time), shift)

        events_by_day: Dict[date, List[PunchEvent]] = defaultdict(list)
        for event in self._punches.list_for_employee_between(employee_id=employee_id, start=range_start, end=events_end):
            events_by_day[self._tz.local_date(event.timestamp)].append(event)

        hours = self._business_hours_for(employee_id)

        days: List[ReconciledDay] = []
        day = start
        while day <= end:
            shift = shifts_by_day.get(day)
            events = events_by_day.get(day, [])
            next_events = events_by_day.get(day + timedelta(days=1), [])
            cutoff = self._engine.overnight_cutoff(work_date=day, shift=shift, hours=hours)
            carried = take_overnight_punch_out(events, next_events, cutoff)
            if carried is not None:
                events = events + [carried]
                next_events.remove(carried)

            days.append(
                self._engine.reconcile_day(
                    work_date=day,
                    shift=shift,
                    events=events,
                    hours=hours,
                    now=now,
                )
            )
            day += timedelta(days=1)
        return days
