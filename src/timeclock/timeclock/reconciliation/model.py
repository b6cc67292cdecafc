from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RecordSource
from ..punches.model import PunchEvent


@dataclass(frozen=True)
class DayPunches:
    """The punch data of one local day as reconciliation sees it.

    ``punch_out`` is only set when the day's latest event is a punch-out
    following ``punch_in``; anything else counts as a partial day.
    """

    punch_in: Optional[PunchEvent] = None
    punch_out: Optional[PunchEvent] = None

    @property
    def is_empty(self) -> bool:
        return self.punch_in is None

    @property
    def is_complete(self) -> bool:
        return self.punch_in is not None and self.punch_out is not None


@dataclass(frozen=True)
class ReconciledDay:
    """Read-model: the canonical work record of one employee for one day.

    Note: lunch_minutes is informational and is NOT deducted from
    total_minutes.
    """

    work_date: date
    punch_in: Optional[datetime]
    punch_out: Optional[datetime]
    total_minutes: int
    lunch_minutes: int
    source: RecordSource
    is_ongoing: bool = False
    shift_id: Optional[int] = None

    @property
    def has_data(self) -> bool:
        return self.source != RecordSource.NONE

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "punch_in": self.punch_in.isoformat() if self.punch_in else None,
            "punch_out": self.punch_out.isoformat() if self.punch_out else None,
            "total_minutes": self.total_minutes,
            "lunch_minutes": self.lunch_minutes,
            "source": self.source.value,
            "is_ongoing": self.is_ongoing,
            "has_data": self.has_data,
            "shift_id": self.shift_id,
        }
