from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EntryType


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one recorded clock-in or clock-out instant (UTC-aware)."""

    entry_id: int
    employee_id: str
    company_id: Optional[str]
    entry_type: EntryType
    timestamp: datetime
    is_automatic: bool = False

    @property
    def is_punch_in(self) -> bool:
        return self.entry_type == EntryType.PUNCH_IN


@dataclass(frozen=True)
class NewPunch:
    """Values for one row to insert into time_entries."""

    employee_id: str
    company_id: Optional[str]
    entry_type: EntryType
    timestamp: datetime
    is_automatic: bool = True
