from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Dict, Iterable, Optional

from ..common.datetime_utils import parse_hhmm
from ..core.exceptions import ConfigurationError


def weekday_index(day: date) -> int:
    """Weekday as stored in business_hours: 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


@dataclass(frozen=True)
class WeekdayHours:
    day: int
    is_open: bool
    open_time: time
    close_time: time
    day_name: Optional[str] = None

    @property
    def wraps_midnight(self) -> bool:
        return self.close_time < self.open_time


@dataclass(frozen=True)
class BusinessHours:
    """Per-company weekly opening table (one window per weekday)."""

    company_id: str
    days: Dict[int, WeekdayHours] = field(default_factory=dict)

    def for_weekday(self, day: int) -> Optional[WeekdayHours]:
        return self.days.get(int(day) % 7)

    def for_date(self, day: date) -> Optional[WeekdayHours]:
        return self.for_weekday(weekday_index(day))


@dataclass(frozen=True)
class ClosingStatus:
    """Where "now" sits relative to the business's applicable closing time.

    ``business_date`` is the local date whose opening window the boundary
    belongs to; it differs from today's date while a window that opened
    yesterday is still running past midnight.
    """

    is_open_now: bool
    closing_boundary: Optional[datetime]
    business_date: date


def _parse_entry(raw: Dict[str, Any]) -> WeekdayHours:
    try:
        day = int(raw["day"])
        if not 0 <= day <= 6:
            raise ValueError(f"day out of range: {day}")
        return WeekdayHours(
            day=day,
            is_open=bool(raw.get("isOpen", False)),
            open_time=parse_hhmm(str(raw.get("openTime") or "00:00")),
            close_time=parse_hhmm(str(raw.get("closeTime") or "00:00")),
            day_name=raw.get("dayName"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid business hours entry {raw!r}: {e}") from e


def parse_business_hours(company_id: str, raw: Any) -> BusinessHours:
    """Build BusinessHours from the stored JSON (string or decoded list)."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Business hours for company {company_id} are not valid JSON") from e

    if not isinstance(raw, Iterable) or isinstance(raw, dict):
        raise ConfigurationError(f"Business hours for company {company_id} must be a list")

    days: Dict[int, WeekdayHours] = {}
    for item in raw:
        if not isinstance(item, dict):
            raise ConfigurationError(f"Invalid business hours entry {item!r}")
        entry = _parse_entry(item)
        days[entry.day] = entry
    return BusinessHours(company_id=str(company_id), days=days)
