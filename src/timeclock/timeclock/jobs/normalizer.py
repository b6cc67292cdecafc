"""Replace mechanically exact automatic punches with realistic ones.

Each employee with a shift on the target date gets their punches for that day
rewritten as one pair: shift start and shift end, each moved by a few minutes.
The offsets come from a Gaussian seeded by (employee, date, side), so running
the pass again for the same day writes the very same timestamps.
"""
from __future__ import annotations

import hashlib
import logging
import math
import random
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from ..common.timezone import TimeZoneConverter
from ..core.constants import NORMALIZER_CLAMP_MINUTES, NORMALIZER_STDDEV_MINUTES
from ..core.enums import EntryType, PunchKind
from ..punches.model import NewPunch
from ..punches.repository import PunchRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .model import NormalizationSummary

logger = logging.getLogger(__name__)


def variation_seed(employee_id: str, work_date: date, kind: PunchKind) -> int:
    key = f"{employee_id}{work_date.strftime('%Y-%m-%d')}{kind.value}"
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def gaussian_from_seed(seed: int) -> float:
    """Standard normal sample via the Box-Muller transform."""
    rng = random.Random(seed)
    u1 = 1.0 - rng.random()  # (0, 1], keeps log() finite
    u2 = rng.random()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def variation_minutes(employee_id: str, work_date: date, kind: PunchKind) -> int:
    """Whole-minute offset, mean 0, sd 4, clamped to +/-10."""
    raw = gaussian_from_seed(variation_seed(employee_id, work_date, kind)) * NORMALIZER_STDDEV_MINUTES
    return max(-NORMALIZER_CLAMP_MINUTES, min(NORMALIZER_CLAMP_MINUTES, int(round(raw))))


class EntryNormalizer:
    def __init__(self, shifts: ShiftRepository, punches: PunchRepository, converter: TimeZoneConverter):
        self._shifts = shifts
        self._punches = punches
        self._tz = converter

    def _normalize_employee(self, employee_id: str, work_date: date, shifts: List[Shift]) -> None:
        day_start, day_end = self._tz.day_bounds(work_date)
        # Overnight shifts end after midnight; their punch-out must go too.
        latest_end = max(s.end_time for s in shifts) + timedelta(minutes=NORMALIZER_CLAMP_MINUTES)
        deleted = self._punches.delete_for_employee_between(
            employee_id=employee_id, start=day_start, end=max(day_end, latest_end + timedelta(seconds=1))
        )
        logger.debug("Deleted %d entries for employee %s on %s", deleted, employee_id, work_date)

        in_offset = variation_minutes(employee_id, work_date, PunchKind.IN)
        out_offset = variation_minutes(employee_id, work_date, PunchKind.OUT)

        for shift in shifts:
            self._punches.create(
                NewPunch(
                    employee_id=employee_id,
                    company_id=shift.company_id,
                    entry_type=EntryType.PUNCH_IN,
                    timestamp=shift.start_time + timedelta(minutes=in_offset),
                    is_automatic=True,
                )
            )
            self._punches.create(
                NewPunch(
                    employee_id=employee_id,
                    company_id=shift.company_id,
                    entry_type=EntryType.PUNCH_OUT,
                    timestamp=shift.end_time + timedelta(minutes=out_offset),
                    is_automatic=True,
                )
            )
        logger.info("Employee %s: %+dmin in, %+dmin out on %s", employee_id, in_offset, out_offset, work_date)

    def normalize(self, work_date: date, *, company_ids: Optional[Iterable[str]] = None) -> NormalizationSummary:
        """Rewrite the punches of every employee scheduled on ``work_date``.

        ``company_ids`` restricts the pass to shifts of those tenants.
        """
        day_start, day_end = self._tz.day_bounds(work_date)
        shifts = list(self._shifts.list_starting_between(start=day_start, end=day_end))
        if company_ids is not None:
            wanted = set(company_ids)
            shifts = [s for s in shifts if s.company_id in wanted]

        summary = NormalizationSummary(work_date=work_date, total_shifts=len(shifts))
        if not shifts:
            logger.info("No shifts found for %s; nothing to normalize", work_date)
            return summary

        by_employee: Dict[str, List[Shift]] = defaultdict(list)
        for shift in shifts:
            by_employee[shift.employee_id].append(shift)

        for employee_id, employee_shifts in by_employee.items():
            try:
                self._normalize_employee(employee_id, work_date, employee_shifts)
            except Exception:
                logger.exception("Error normalizing entries for employee %s on %s", employee_id, work_date)
                summary.failed_count += len(employee_shifts)
                continue
            summary.normalized += len(employee_shifts)

        logger.info("Normalization result: %s", summary.to_dict())
        return summary
