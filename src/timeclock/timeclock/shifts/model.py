from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a planned work period (instants are UTC-aware)."""

    shift_id: int
    employee_id: str
    company_id: Optional[str]
    start_time: datetime
    end_time: datetime
    auto_punch_in: bool = False
    location: Optional[str] = None
    notes: Optional[str] = None
