from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..shifts.model import Shift
from .model import DayPunches
from .strategies.actual_strategy import ActualPairStrategy, OngoingStrategy, PartialPunchStrategy
from .strategies.base import ReconciliationStrategy
from .strategies.empty_strategy import EmptyDayStrategy
from .strategies.schedule_strategy import ScheduleStrategy


@dataclass
class ReconciliationStrategyFactory:
    """Factory Pattern: pick the record source for a day by strict priority.

    1. complete punch pair
    2. schedule, once the business has closed for the day (partial punches ignored)
    3. ongoing punch-in on the running day (today, or last night's open window)
    4. schedule, when nothing was punched
    5. lone punch-in on an earlier day
    6. nothing
    """

    def for_day(
        self,
        *,
        punches: DayPunches,
        shift: Optional[Shift],
        is_current: bool,
        business_closed: bool,
    ) -> ReconciliationStrategy:
        if punches.is_complete:
            return ActualPairStrategy()

        if shift and business_closed:
            return ScheduleStrategy()

        if not punches.is_empty:
            if is_current:
                return OngoingStrategy()
            return PartialPunchStrategy()

        if shift:
            return ScheduleStrategy()
        return EmptyDayStrategy()
