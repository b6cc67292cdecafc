from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Optional, Set

from ..business_hours.model import ClosingStatus
from ..business_hours.repository import CompanySettingsRepository
from ..business_hours.resolver import BusinessHoursResolver
from ..common.datetime_utils import now_utc
from ..common.timezone import TimeZoneConverter
from ..core.constants import PUNCH_OUT_GRACE_MINUTES, PUNCH_OUT_LATE_MINUTES, STALE_PUNCH_OUT_OFFSET_SECONDS
from ..core.enums import EntryType
from ..core.exceptions import ConfigurationError
from ..punches.model import NewPunch, PunchEvent
from ..punches.repository import PunchRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .model import AutoPunchOutSummary, TenantPunchOutResult
from .normalizer import EntryNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClosingDecision:
    status: ClosingStatus
    should_punch_out: bool
    is_late: bool

    @property
    def acts(self) -> bool:
        return self.should_punch_out or self.is_late


class AutoPunchOutJob:
    """Periodic job: clock everybody out when their business closes.

    One run does three things in order: close punch-ins left open on earlier
    days, punch out employees of every tenant that is at (or well past) its
    closing time, then normalize the punches of the affected day.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        punches: PunchRepository,
        company_settings: CompanySettingsRepository,
        resolver: BusinessHoursResolver,
        converter: TimeZoneConverter,
        normalizer: EntryNormalizer,
        *,
        grace_minutes: int = PUNCH_OUT_GRACE_MINUTES,
        late_minutes: int = PUNCH_OUT_LATE_MINUTES,
    ):
        self._shifts = shifts
        self._punches = punches
        self._settings = company_settings
        self._resolver = resolver
        self._tz = converter
        self._normalizer = normalizer
        self._grace = timedelta(minutes=int(grace_minutes))
        self._late = timedelta(minutes=int(late_minutes))

    def decide(self, status: ClosingStatus, now: datetime) -> ClosingDecision:
        boundary = status.closing_boundary
        if boundary is None:
            return ClosingDecision(status=status, should_punch_out=False, is_late=False)
        return ClosingDecision(
            status=status,
            should_punch_out=boundary <= now <= boundary + self._grace,
            is_late=now >= boundary + self._late,
        )

    def _resolve_tenants(self, now: datetime, summary: AutoPunchOutSummary) -> Dict[str, Optional[ClosingStatus]]:
        statuses: Dict[str, Optional[ClosingStatus]] = {}
        for company_id in self._settings.list_company_ids():
            try:
                hours = self._settings.get_business_hours(company_id)
            except ConfigurationError as e:
                logger.error("Company %s: %s", company_id, e)
                statuses[company_id] = None
                continue
            except Exception:
                logger.exception("Error fetching business hours for company %s", company_id)
                summary.failed_count += 1
                statuses[company_id] = None
                continue

            if hours is None:
                logger.info("Company %s has no business hours configured", company_id)
                statuses[company_id] = None
                continue
            statuses[company_id] = self._resolver.resolve(hours, now)
        return statuses

    def cleanup_stale_punches(
        self,
        now: datetime,
        summary: AutoPunchOutSummary,
        statuses: Dict[str, Optional[ClosingStatus]] | None = None,
    ) -> int:
        """Close every punch-in left open from before the current day.

        "Current day" is the tenant's business day, so a window still running
        past midnight keeps its punch-ins.
        """
        statuses = statuses or {}
        today = self._tz.local_date(now)
        cleaned = 0

        for latest in self._punches.list_latest_per_employee():
            if latest.entry_type != EntryType.PUNCH_IN:
                continue

            status = statuses.get(latest.company_id) if latest.company_id else None
            current_day = status.business_date if status else today
            day_start, _ = self._tz.day_bounds(current_day)
            if latest.timestamp >= day_start:
                continue

            try:
                self._punches.create(
                    NewPunch(
                        employee_id=latest.employee_id,
                        company_id=latest.company_id,
                        entry_type=EntryType.PUNCH_OUT,
                        timestamp=latest.timestamp + timedelta(seconds=STALE_PUNCH_OUT_OFFSET_SECONDS),
                        is_automatic=True,
                    )
                )
            except Exception:
                logger.exception("Error cleaning up old punch-in for employee %s", latest.employee_id)
                summary.failed_count += 1
                continue

            cleaned += 1
            logger.info("Cleaned up old punch-in from %s for employee %s", latest.timestamp.isoformat(), latest.employee_id)

        summary.stale_cleaned_count = cleaned
        return cleaned

    def _shifts_on(self, business_date: date, cache: Dict[date, Dict[str, Shift]]) -> Dict[str, Shift]:
        if business_date not in cache:
            start, end = self._tz.day_bounds(business_date)
            by_employee: Dict[str, Shift] = {}
            for shift in self._shifts.list_starting_between(start=start, end=end):
                current = by_employee.get(shift.employee_id)
                if current is None or shift.end_time > current.end_time:
                    by_employee[shift.employee_id] = shift
            cache[business_date] = by_employee
        return cache[business_date]

    def _punch_out_time(self, punch_in: PunchEvent, shift: Shift, now: datetime) -> datetime:
        # Shift end, clamped into (punch_in, now]: never a negative duration, never a future punch.
        if shift.end_time <= punch_in.timestamp or shift.end_time > now:
            return now
        return shift.end_time

    def _punch_out_tenant(
        self,
        company_id: str,
        decision: ClosingDecision,
        now: datetime,
        summary: AutoPunchOutSummary,
        shift_cache: Dict[date, Dict[str, Shift]],
    ) -> int:
        clocked_in = [
            e for e in self._punches.list_latest_per_employee(company_id=company_id)
            if e.entry_type == EntryType.PUNCH_IN
        ]
        summary.total_punched_in += len(clocked_in)
        logger.info("Company %s: %d punched-in employees", company_id, len(clocked_in))
        if not clocked_in:
            return 0

        boundary = decision.status.closing_boundary
        shifts = self._shifts_on(decision.status.business_date, shift_cache)
        written = 0

        for punch_in in clocked_in:
            employee_id = punch_in.employee_id
            if punch_in.timestamp >= boundary:
                logger.info("Employee %s punched in after closing; left open", employee_id)
                summary.left_open_count += 1
                continue

            shift = shifts.get(employee_id)
            if decision.is_late:
                timestamp = now
            elif shift is None:
                timestamp = now
            else:
                timestamp = self._punch_out_time(punch_in, shift, now)

            try:
                self._punches.create(
                    NewPunch(
                        employee_id=employee_id,
                        company_id=punch_in.company_id or company_id,
                        entry_type=EntryType.PUNCH_OUT,
                        timestamp=timestamp,
                        is_automatic=True,
                    )
                )
            except Exception:
                logger.exception("Error creating punch-out for employee %s", employee_id)
                summary.failed_count += 1
                continue

            written += 1
            if decision.is_late:
                summary.punched_out_late += 1
                logger.info("Force punched out employee %s (late, %s)", employee_id, timestamp.isoformat())
            elif shift is None:
                summary.punched_out_no_shift += 1
                logger.info("Punched out employee %s (no shift) at %s", employee_id, timestamp.isoformat())
            else:
                summary.punched_out_at_shift_end += 1
                logger.info("Punched out employee %s at shift end %s", employee_id, timestamp.isoformat())
        return written

    def run(
        self,
        *,
        now: Optional[datetime] = None,
        target_date: Optional[date] = None,
        force: bool = False,
    ) -> AutoPunchOutSummary:
        """Run one pass.

        ``force`` (or an explicit ``target_date``) re-runs the normalizer for
        ``target_date`` (default: today) even when nobody was punched out.
        """
        now = now or now_utc()
        summary = AutoPunchOutSummary(timestamp=now)
        logger.info("Auto punch-out triggered at %s", now.isoformat())

        statuses = self._resolve_tenants(now, summary)
        self.cleanup_stale_punches(now, summary, statuses)

        shift_cache: Dict[date, Dict[str, Shift]] = {}
        to_normalize: Dict[date, Optional[Set[str]]] = {}

        for company_id, status in statuses.items():
            summary.tenants_checked += 1
            result = TenantPunchOutResult(company_id=company_id)
            summary.tenants.append(result)

            if status is None:
                result.skipped_reason = "no business hours"
                continue

            decision = self.decide(status, now)
            result.business_date = status.business_date
            result.closing_boundary = status.closing_boundary
            result.should_punch_out = decision.should_punch_out
            result.is_late = decision.is_late

            if not decision.acts:
                result.skipped_reason = "not closing time"
                logger.info("Company %s: not punch-out time yet (closes %s)", company_id, status.closing_boundary)
                continue

            summary.tenants_closing += 1
            try:
                written = self._punch_out_tenant(company_id, decision, now, summary, shift_cache)
            except Exception:
                logger.exception("Error processing company %s", company_id)
                summary.failed_count += 1
                continue

            if written:
                companies = to_normalize.setdefault(status.business_date, set())
                if companies is not None:
                    companies.add(company_id)

        if force or target_date is not None:
            to_normalize[target_date or self._tz.local_date(now)] = None

        for work_date, companies in sorted(to_normalize.items()):
            try:
                summary.normalized.append(self._normalizer.normalize(work_date, company_ids=companies))
            except Exception:
                logger.exception("Error normalizing time entries for %s", work_date)
                summary.failed_count += 1

        logger.info("Auto punch-out result: %s", summary.to_dict())
        return summary
