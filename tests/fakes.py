"""In-memory repositories and collaborators shared by the unit tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Union

from src.timeclock.timeclock.business_hours.model import BusinessHours, parse_business_hours
from src.timeclock.timeclock.jobs.model import NormalizationSummary
from src.timeclock.timeclock.profiles.model import Profile
from src.timeclock.timeclock.punches.model import NewPunch, PunchEvent
from src.timeclock.timeclock.shifts.model import Shift


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def weekly_hours(company_id: str, windows: Dict[int, tuple]) -> BusinessHours:
    """``windows`` maps weekday (0 = Sunday) to ("HH:MM", "HH:MM"); other days are closed."""
    raw = []
    for day in range(7):
        if day in windows:
            open_time, close_time = windows[day]
            raw.append({"day": day, "isOpen": True, "openTime": open_time, "closeTime": close_time})
        else:
            raw.append({"day": day, "isOpen": False, "openTime": "00:00", "closeTime": "00:00"})
    return parse_business_hours(company_id, raw)


class InMemoryShifts:
    def __init__(self, shifts: Optional[List[Shift]] = None):
        self.shifts: List[Shift] = list(shifts or [])

    def add(self, shift: Shift) -> Shift:
        self.shifts.append(shift)
        return shift

    def list_auto_punch_in_candidates(self, *, now: datetime, lookahead_until: datetime):
        items = [
            s
            for s in self.shifts
            if s.auto_punch_in and (now <= s.start_time <= lookahead_until or s.start_time <= now <= s.end_time)
        ]
        return sorted(items, key=lambda s: s.start_time)

    def list_starting_between(self, *, start: datetime, end: datetime, employee_id=None, company_id=None):
        items = [
            s
            for s in self.shifts
            if start <= s.start_time < end
            and (employee_id is None or s.employee_id == employee_id)
            and (company_id is None or s.company_id == company_id)
        ]
        return sorted(items, key=lambda s: s.start_time)


class InMemoryPunches:
    def __init__(self):
        self.events: List[PunchEvent] = []
        self._id = 0

    def add(self, employee_id: str, entry_type, timestamp: datetime, *, company_id="c1", is_automatic=False) -> PunchEvent:
        self.create(
            NewPunch(
                employee_id=employee_id,
                company_id=company_id,
                entry_type=entry_type,
                timestamp=timestamp,
                is_automatic=is_automatic,
            )
        )
        return self.events[-1]

    def for_employee(self, employee_id: str) -> List[PunchEvent]:
        return sorted((e for e in self.events if e.employee_id == employee_id), key=lambda e: (e.timestamp, e.entry_id))

    def get_latest_for_employee(self, employee_id: str) -> Optional[PunchEvent]:
        items = self.for_employee(employee_id)
        return items[-1] if items else None

    def list_latest_per_employee(self, *, company_id=None):
        latest = [self.get_latest_for_employee(e) for e in sorted({e.employee_id for e in self.events})]
        return [e for e in latest if company_id is None or e.company_id == company_id]

    def find_automatic_punch_in(self, *, employee_id: str, start: datetime, end: datetime):
        for e in self.for_employee(employee_id):
            if e.is_punch_in and e.is_automatic and start <= e.timestamp <= end:
                return e
        return None

    def list_for_employee_between(self, *, employee_id: str, start: datetime, end: datetime):
        return [e for e in self.for_employee(employee_id) if start <= e.timestamp < end]

    def create(self, punch: NewPunch) -> int:
        self._id += 1
        self.events.append(
            PunchEvent(
                entry_id=self._id,
                employee_id=punch.employee_id,
                company_id=punch.company_id,
                entry_type=punch.entry_type,
                timestamp=punch.timestamp,
                is_automatic=punch.is_automatic,
            )
        )
        return self._id

    def delete_for_employee_between(self, *, employee_id: str, start: datetime, end: datetime) -> int:
        keep = [e for e in self.events if not (e.employee_id == employee_id and start <= e.timestamp < end)]
        deleted = len(self.events) - len(keep)
        self.events = keep
        return deleted


@dataclass
class InMemoryProfiles:
    profiles: Dict[str, Profile] = field(default_factory=dict)

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        return self.profiles.get(user_id)


@dataclass
class InMemoryCompanySettings:
    """Values are BusinessHours, None (not configured) or an exception to raise."""

    hours: Dict[str, Union[BusinessHours, None, Exception]] = field(default_factory=dict)

    def list_company_ids(self):
        return list(self.hours)

    def get_business_hours(self, company_id: str) -> Optional[BusinessHours]:
        value = self.hours.get(company_id)
        if isinstance(value, Exception):
            raise value
        return value


class RecordingHook:
    def __init__(self, error: Optional[Exception] = None):
        self.calls: List[tuple] = []
        self._error = error

    def trigger(self, *, employee_id: str, timestamp: datetime) -> None:
        self.calls.append((employee_id, timestamp))
        if self._error:
            raise self._error


class RecordingNormalizer:
    def __init__(self):
        self.calls: List[tuple] = []

    def normalize(self, work_date: date, *, company_ids=None) -> NormalizationSummary:
        self.calls.append((work_date, None if company_ids is None else set(company_ids)))
        return NormalizationSummary(work_date=work_date)
