"""Conversion between stored UTC instants and the business's civil time.

Every other module goes through :class:`TimeZoneConverter`; nothing else adds
or subtracts UTC offsets by hand.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_BUSINESS_TIMEZONE
from ..core.exceptions import ConfigurationError
from .datetime_utils import ensure_utc


class TimeZoneConverter:
    def __init__(self, tz_name: str = DEFAULT_BUSINESS_TIMEZONE):
        try:
            self._tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown timezone: {tz_name!r}") from e
        self._name = tz_name

    @property
    def name(self) -> str:
        return self._name

    def to_local(self, instant: datetime) -> datetime:
        """Civil date-time in the business timezone (aware)."""
        return ensure_utc(instant).astimezone(self._tz)

    def to_utc(self, local_date: date, local_time: time) -> datetime:
        """Instant at which the business clock shows ``local_date local_time``.

        Wall times skipped or repeated by a DST change resolve with fold=0.
        """
        local = datetime.combine(local_date, local_time.replace(tzinfo=None)).replace(tzinfo=self._tz, fold=0)
        return local.astimezone(timezone.utc)

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()

    def day_bounds(self, local_date: date) -> Tuple[datetime, datetime]:
        """Half-open UTC interval [start, end) covering one local calendar day."""
        start = self.to_utc(local_date, time(0, 0))
        end = self.to_utc(local_date + timedelta(days=1), time(0, 0))
        return start, end
