"""Opening-window evaluation for one tenant's weekly business hours.

A window whose close time is earlier than its open time runs past midnight,
so early in the morning the window that matters is usually yesterday's, not
today's. Everything here works on the business's local clock through
:class:`~timeclock.common.timezone.TimeZoneConverter`.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..common.timezone import TimeZoneConverter
from .model import BusinessHours, ClosingStatus, WeekdayHours


class BusinessHoursResolver:
    def __init__(self, converter: TimeZoneConverter):
        self._tz = converter

    def _carry_over(self, hours: BusinessHours, today: date) -> Optional[WeekdayHours]:
        yesterday = hours.for_date(today - timedelta(days=1))
        if yesterday and yesterday.is_open and yesterday.wraps_midnight:
            return yesterday
        return None

    def resolve(self, hours: BusinessHours, now: datetime) -> ClosingStatus:
        """Return whether the business is open at ``now`` and which closing
        instant currently applies.

        ``closing_boundary`` is None only when today is a closed day and no
        window from yesterday reaches into it.
        """
        local = self._tz.to_local(now)
        today = local.date()
        yesterday = today - timedelta(days=1)
        clock = local.time().replace(tzinfo=None, microsecond=0)

        carry = self._carry_over(hours, today)
        if carry and clock <= carry.close_time:
            # Still inside the window that opened yesterday.
            return ClosingStatus(
                is_open_now=True,
                closing_boundary=self._tz.to_utc(today, carry.close_time),
                business_date=yesterday,
            )

        entry = hours.for_date(today)
        if not entry or not entry.is_open:
            if carry:
                return ClosingStatus(
                    is_open_now=False,
                    closing_boundary=self._tz.to_utc(today, carry.close_time),
                    business_date=yesterday,
                )
            return ClosingStatus(is_open_now=False, closing_boundary=None, business_date=today)

        if clock < entry.open_time:
            if carry:
                # Past yesterday's after-midnight close, before today's opening.
                return ClosingStatus(
                    is_open_now=False,
                    closing_boundary=self._tz.to_utc(today, carry.close_time),
                    business_date=yesterday,
                )
            return ClosingStatus(
                is_open_now=False,
                closing_boundary=self.closing_instant(entry, today),
                business_date=today,
            )

        if not entry.wraps_midnight:
            return ClosingStatus(
                is_open_now=clock < entry.close_time,
                closing_boundary=self._tz.to_utc(today, entry.close_time),
                business_date=today,
            )

        return ClosingStatus(
            is_open_now=True,
            closing_boundary=self.closing_instant(entry, today),
            business_date=today,
        )

    def closing_instant(self, entry: WeekdayHours, day: date) -> datetime:
        """Instant at which the window opening on ``day`` closes."""
        close_day = day + timedelta(days=1) if entry.wraps_midnight else day
        return self._tz.to_utc(close_day, entry.close_time)

    def has_closed(self, hours: Optional[BusinessHours], day: date, now: datetime) -> bool:
        """True once the business is closed for ``day``.

        Future days are never closed. Earlier days are, except yesterday while
        its window still runs past midnight. For today, a closed weekday counts
        as closed all day; otherwise the day closes at the end of its window.
        Without configuration only earlier days are closed.
        """
        today = self._tz.local_date(now)
        if day < today:
            overnight = self.overnight_close(hours, day)
            if overnight is None:
                return True
            return now >= overnight
        if day > today or hours is None:
            return False

        entry = hours.for_date(day)
        if not entry or not entry.is_open:
            return True
        return now >= self.closing_instant(entry, day)

    def overnight_close(self, hours: Optional[BusinessHours], day: date) -> Optional[datetime]:
        """Closing instant of ``day``'s window when it runs past midnight, else None."""
        entry = hours.for_date(day) if hours else None
        if not entry or not entry.is_open or not entry.wraps_midnight:
            return None
        return self.closing_instant(entry, day)
