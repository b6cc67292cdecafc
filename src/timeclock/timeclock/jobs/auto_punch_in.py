from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.constants import AUTO_PUNCH_DUPLICATE_WINDOW_MINUTES, NORMALIZER_CLAMP_MINUTES, PUNCH_IN_LOOKAHEAD_MINUTES
from ..core.enums import EntryType
from ..core.exceptions import LookupFailure
from ..profiles.repository import ProfileRepository
from ..punches.model import NewPunch
from ..punches.repository import PunchRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .hooks import NullPunchInHook, PunchInHook
from .model import AutoPunchInSummary

logger = logging.getLogger(__name__)


class AutoPunchInJob:
    """Periodic job: clock employees in at the start of auto-punch shifts.

    Shifts already running are picked up as well, so a missed invocation is
    repaired by the next one. The punch is always stamped with the shift's
    start time.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        punches: PunchRepository,
        profiles: ProfileRepository,
        hook: PunchInHook | None = None,
        *,
        lookahead_minutes: int = PUNCH_IN_LOOKAHEAD_MINUTES,
        duplicate_window_minutes: int = AUTO_PUNCH_DUPLICATE_WINDOW_MINUTES,
    ):
        self._shifts = shifts
        self._punches = punches
        self._profiles = profiles
        self._hook = hook or NullPunchInHook()
        self._lookahead = timedelta(minutes=int(lookahead_minutes))
        self._duplicate_window = timedelta(minutes=int(duplicate_window_minutes))
        # The normalizer may move an automatic punch-in this far before shift start.
        self._normalized_drift = timedelta(minutes=NORMALIZER_CLAMP_MINUTES)

    def _company_id_for(self, shift: Shift) -> str:
        if shift.company_id:
            return shift.company_id
        profile = self._profiles.get_by_user_id(shift.employee_id)
        if not profile or not profile.company_id:
            raise LookupFailure(f"No company_id found for employee {shift.employee_id}")
        return profile.company_id

    def _fire_hook(self, shift: Shift) -> None:
        try:
            self._hook.trigger(employee_id=shift.employee_id, timestamp=shift.start_time)
        except Exception:
            # Never undo or fail the punch-in because of the side effect.
            logger.exception("Punch-in hook failed for employee %s", shift.employee_id)

    def _process_shift(self, shift: Shift, summary: AutoPunchInSummary) -> None:
        latest = self._punches.get_latest_for_employee(shift.employee_id)
        if latest and latest.entry_type == EntryType.PUNCH_IN:
            logger.info("Employee %s is already punched in, skipping shift %s", shift.employee_id, shift.shift_id)
            summary.already_punched_in_count += 1
            return

        existing = self._punches.find_automatic_punch_in(
            employee_id=shift.employee_id,
            start=shift.start_time - self._normalized_drift,
            end=shift.start_time + self._duplicate_window,
        )
        if existing:
            logger.info("Automatic punch-in already exists for employee %s at shift %s start", shift.employee_id, shift.shift_id)
            summary.duplicate_count += 1
            return

        company_id = self._company_id_for(shift)

        self._punches.create(
            NewPunch(
                employee_id=shift.employee_id,
                company_id=company_id,
                entry_type=EntryType.PUNCH_IN,
                timestamp=shift.start_time,
                is_automatic=True,
            )
        )
        summary.processed_count += 1
        logger.info("Created automatic punch-in for employee %s at %s", shift.employee_id, shift.start_time.isoformat())

        self._fire_hook(shift)

    def run(self, *, now: Optional[datetime] = None) -> AutoPunchInSummary:
        now = now or now_utc()
        logger.info("Auto punch-in triggered at %s", now.isoformat())

        candidates = self._shifts.list_auto_punch_in_candidates(now=now, lookahead_until=now + self._lookahead)
        summary = AutoPunchInSummary(timestamp=now, shifts_checked=len(candidates))
        logger.info("Found %d candidate shifts with auto punch-in enabled", len(candidates))

        for shift in candidates:
            try:
                self._process_shift(shift, summary)
            except LookupFailure as e:
                logger.error("Skipping shift %s: %s", shift.shift_id, e)
                summary.skipped_count += 1
            except Exception:
                logger.exception("Error processing shift %s for employee %s", shift.shift_id, shift.employee_id)
                summary.failed_count += 1

        logger.info("Auto punch-in result: %s", summary.to_dict())
        return summary
