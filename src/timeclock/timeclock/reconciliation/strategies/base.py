from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from ...core.constants import LUNCH_MINUTES, LUNCH_THRESHOLD_MINUTES
from ...shifts.model import Shift
from ..model import DayPunches, ReconciledDay


def lunch_minutes_for(total_minutes: int) -> int:
    """Fixed break policy: 30 minutes once a stretch exceeds 5.5 hours."""
    return LUNCH_MINUTES if total_minutes > LUNCH_THRESHOLD_MINUTES else 0


class ReconciliationStrategy(ABC):
    """Strategy Pattern: encapsulate how one day's record is derived."""

    @abstractmethod
    def reconcile(
        self,
        *,
        work_date: date,
        shift: Optional[Shift],
        punches: DayPunches,
        now: datetime,
    ) -> ReconciledDay:
        raise NotImplementedError
