from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def list_auto_punch_in_candidates(self, *, now: datetime, lookahead_until: datetime) -> Sequence[Shift]:
        """Shifts with auto_punch_in enabled that start in [now, lookahead_until]
        or are running at ``now``."""

        raise NotImplementedError

    def list_starting_between(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[str] = None,
        company_id: Optional[str] = None,
    ) -> Sequence[Shift]:
        """Shifts whose start_time falls in the half-open range [start, end), ordered by start."""

        raise NotImplementedError
