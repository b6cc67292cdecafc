from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass
class AutoPunchInSummary:
    timestamp: datetime
    shifts_checked: int = 0
    processed_count: int = 0
    already_punched_in_count: int = 0
    duplicate_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass
class NormalizationSummary:
    work_date: date
    total_shifts: int = 0
    normalized: int = 0
    failed_count: int = 0

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "total_shifts": self.total_shifts,
            "normalized": self.normalized,
            "failed_count": self.failed_count,
        }


@dataclass
class TenantPunchOutResult:
    company_id: str
    business_date: Optional[date] = None
    closing_boundary: Optional[datetime] = None
    should_punch_out: bool = False
    is_late: bool = False
    skipped_reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "company_id": self.company_id,
            "business_date": self.business_date.strftime("%Y-%m-%d") if self.business_date else None,
            "closing_boundary": self.closing_boundary.isoformat() if self.closing_boundary else None,
            "should_punch_out": self.should_punch_out,
            "is_late": self.is_late,
            "skipped_reason": self.skipped_reason,
        }


@dataclass
class AutoPunchOutSummary:
    timestamp: datetime
    stale_cleaned_count: int = 0
    tenants_checked: int = 0
    tenants_closing: int = 0
    total_punched_in: int = 0
    punched_out_at_shift_end: int = 0
    punched_out_no_shift: int = 0
    punched_out_late: int = 0
    left_open_count: int = 0
    failed_count: int = 0
    tenants: List[TenantPunchOutResult] = field(default_factory=list)
    normalized: List[NormalizationSummary] = field(default_factory=list)

    @property
    def total_punched_out(self) -> int:
        return self.punched_out_at_shift_end + self.punched_out_no_shift + self.punched_out_late

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "stale_cleaned_count": self.stale_cleaned_count,
            "tenants_checked": self.tenants_checked,
            "tenants_closing": self.tenants_closing,
            "total_punched_in": self.total_punched_in,
            "punched_out_at_shift_end": self.punched_out_at_shift_end,
            "punched_out_no_shift": self.punched_out_no_shift,
            "punched_out_late": self.punched_out_late,
            "total_punched_out": self.total_punched_out,
            "left_open_count": self.left_open_count,
            "failed_count": self.failed_count,
            "tenants": [t.to_dict() for t in self.tenants],
            "normalized": [n.to_dict() for n in self.normalized],
        }
