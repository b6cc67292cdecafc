from datetime import date

import pytest

from src.timeclock.timeclock.core.enums import EntryType, RecordSource
from src.timeclock.timeclock.core.exceptions import ValidationError
from src.timeclock.timeclock.profiles.model import Profile
from src.timeclock.timeclock.reconciliation.engine import ReconciliationEngine, select_day_punches, take_overnight_punch_out
from src.timeclock.timeclock.reconciliation.factory import ReconciliationStrategyFactory
from src.timeclock.timeclock.reconciliation.service import ReconciliationService
from src.timeclock.timeclock.reconciliation.strategies.actual_strategy import ActualPairStrategy
from src.timeclock.timeclock.reconciliation.strategies.base import lunch_minutes_for
from src.timeclock.timeclock.reconciliation.strategies.schedule_strategy import ScheduleStrategy
from src.timeclock.timeclock.shifts.model import Shift

from tests.fakes import InMemoryPunches, utc, weekly_hours

MONDAY = date(2024, 5, 6)
WEDNESDAY = date(2024, 5, 8)
NOW = utc(2024, 5, 8, 12, 0)


def _shift(day=6, start=(9, 0), end=(17, 0), shift_id=1):
    return Shift(
        shift_id=shift_id,
        employee_id="e1",
        company_id="c1",
        start_time=utc(2024, 5, day, *start),
        end_time=utc(2024, 5, day, *end),
    )


def _events(*pairs):
    repo = InMemoryPunches()
    for entry_type, ts in pairs:
        repo.add("e1", entry_type, ts)
    return repo.events


@pytest.fixture
def engine(utc_converter, resolver):
    return ReconciliationEngine(utc_converter, resolver)


def test_lunch_threshold_is_strictly_above_330():
    assert lunch_minutes_for(330) == 0
    assert lunch_minutes_for(331) == 30


def test_complete_pair_beats_schedule(engine):
    events = _events((EntryType.PUNCH_IN, utc(2024, 5, 6, 9, 5)), (EntryType.PUNCH_OUT, utc(2024, 5, 6, 16, 45)))

    day = engine.reconcile_day(work_date=MONDAY, shift=_shift(), events=events, hours=None, now=NOW)

    assert day.source == RecordSource.ACTUAL
    assert day.punch_in == utc(2024, 5, 6, 9, 5)
    assert day.punch_out == utc(2024, 5, 6, 16, 45)
    assert day.total_minutes == 460
    assert day.lunch_minutes == 30
    assert day.shift_id == 1


@pytest.mark.parametrize("out_minute,lunch", [(30, 0), (31, 30)])
def test_lunch_on_actual_pair(engine, out_minute, lunch):
    events = _events((EntryType.PUNCH_IN, utc(2024, 5, 6, 9, 0)), (EntryType.PUNCH_OUT, utc(2024, 5, 6, 14, out_minute)))

    day = engine.reconcile_day(work_date=MONDAY, shift=None, events=events, hours=None, now=NOW)

    assert day.lunch_minutes == lunch
    # Lunch is reported, not deducted.
    assert day.total_minutes == 300 + out_minute


def test_partial_punches_fall_back_to_schedule_once_closed(engine):
    events = _events((EntryType.PUNCH_IN, utc(2024, 5, 6, 9, 12)))

    day = engine.reconcile_day(work_date=MONDAY, shift=_shift(), events=events, hours=None, now=NOW)

    assert day.source == RecordSource.SCHEDULE
    assert day.punch_in == utc(2024, 5, 6, 9, 0)
    assert day.punch_out == utc(2024, 5, 6, 17, 0)
    assert day.total_minutes == 480
    assert day.lunch_minutes == 30


def test_schedule_used_when_nothing_was_punched(engine):
    day = engine.reconcile_day(work_date=MONDAY, shift=_shift(end=(13, 0)), events=[], hours=None, now=NOW)

    assert day.source == RecordSource.SCHEDULE
    assert day.total_minutes == 240
    assert day.lunch_minutes == 0


def test_ongoing_today_is_measured_to_now(engine):
    hours = weekly_hours("c1", {3: ("08:00", "18:00")})
    events = _events((EntryType.PUNCH_IN, utc(2024, 5, 8, 9, 0)))

    day = engine.reconcile_day(work_date=WEDNESDAY, shift=_shift(day=8), events=events, hours=hours, now=NOW)

    assert day.source == RecordSource.ACTUAL
    assert day.is_ongoing is True
    assert day.punch_out is None
    assert day.total_minutes == 180
    assert day.lunch_minutes == 0


def test_lone_punch_in_on_earlier_day_without_shift(engine):
    events = _events((EntryType.PUNCH_IN, utc(2024, 5, 6, 9, 0)))

    day = engine.reconcile_day(work_date=MONDAY, shift=None, events=events, hours=None, now=NOW)

    assert day.source == RecordSource.ACTUAL
    assert day.punch_out is None
    assert day.total_minutes == 0
    assert day.is_ongoing is False


def test_empty_day_has_no_data(engine):
    day = engine.reconcile_day(work_date=MONDAY, shift=None, events=[], hours=None, now=NOW)

    assert day.source == RecordSource.NONE
    assert day.has_data is False
    assert day.to_dict()["source"] == "none"


def test_latest_entry_decides_whether_day_is_complete():
    events = _events(
        (EntryType.PUNCH_IN, utc(2024, 5, 6, 9, 0)),
        (EntryType.PUNCH_OUT, utc(2024, 5, 6, 12, 0)),
        (EntryType.PUNCH_IN, utc(2024, 5, 6, 12, 30)),
    )

    punches = select_day_punches(events)

    assert punches.punch_in.timestamp == utc(2024, 5, 6, 9, 0)
    assert punches.is_complete is False


def test_factory_priority():
    factory = ReconciliationStrategyFactory()
    complete = select_day_punches(
        _events((EntryType.PUNCH_IN, utc(2024, 5, 6, 9, 0)), (EntryType.PUNCH_OUT, utc(2024, 5, 6, 17, 0)))
    )

    assert isinstance(factory.for_day(punches=complete, shift=_shift(), is_current=False, business_closed=True), ActualPairStrategy)
    assert isinstance(
        factory.for_day(punches=select_day_punches([]), shift=_shift(), is_current=True, business_closed=False),
        ScheduleStrategy,
    )


def _service(utc_converter, engine, shifts, punches, profiles, company_settings):
    return ReconciliationService(shifts, punches, profiles, company_settings, engine, utc_converter)


def test_range_returns_one_record_per_day(utc_converter, engine, shifts, punches, profiles, company_settings):
    profiles.profiles["e1"] = Profile(user_id="e1", company_id="c1")
    company_settings.hours["c1"] = weekly_hours("c1", {d: ("09:00", "17:00") for d in range(1, 6)})
    shifts.add(_shift())
    punches.add("e1", EntryType.PUNCH_IN, utc(2024, 5, 7, 8, 58))
    punches.add("e1", EntryType.PUNCH_OUT, utc(2024, 5, 7, 17, 4))
    punches.add("e1", EntryType.PUNCH_IN, utc(2024, 5, 8, 9, 0))

    svc = _service(utc_converter, engine, shifts, punches, profiles, company_settings)
    days = svc.reconcile_range("e1", date(2024, 5, 5), WEDNESDAY, now=NOW)

    assert [d.work_date for d in days] == [date(2024, 5, 5), MONDAY, date(2024, 5, 7), WEDNESDAY]
    assert [d.source for d in days] == [RecordSource.NONE, RecordSource.SCHEDULE, RecordSource.ACTUAL, RecordSource.ACTUAL]
    assert days[2].total_minutes == 486
    assert days[3].is_ongoing is True


def test_range_survives_broken_business_hours(utc_converter, engine, shifts, punches, profiles, company_settings):
    from src.timeclock.timeclock.core.exceptions import ConfigurationError

    profiles.profiles["e1"] = Profile(user_id="e1", company_id="c1")
    company_settings.hours["c1"] = ConfigurationError("bad json")

    svc = _service(utc_converter, engine, shifts, punches, profiles, company_settings)
    days = svc.reconcile_range("e1", MONDAY, MONDAY, now=NOW)

    assert len(days) == 1
    assert days[0].source == RecordSource.NONE


def test_range_validation(utc_converter, engine, shifts, punches, profiles, company_settings):
    svc = _service(utc_converter, engine, shifts, punches, profiles, company_settings)

    with pytest.raises(ValidationError):
        svc.reconcile_range("e1", WEDNESDAY, MONDAY, now=NOW)
    with pytest.raises(ValidationError):
        svc.reconcile_range("  ", MONDAY, WEDNESDAY, now=NOW)


def _overnight_setup(shifts, profiles, company_settings):
    profiles.profiles["e1"] = Profile(user_id="e1", company_id="c1")
    company_settings.hours["c1"] = weekly_hours("c1", {1: ("12:00", "03:00")})
    shifts.add(
        Shift(
            shift_id=1,
            employee_id="e1",
            company_id="c1",
            start_time=utc(2024, 5, 6, 18, 0),
            end_time=utc(2024, 5, 7, 2, 0),
        )
    )


def test_overnight_pair_stays_on_the_day_it_started(utc_converter, engine, shifts, punches, profiles, company_settings):
    _overnight_setup(shifts, profiles, company_settings)
    punches.add("e1", EntryType.PUNCH_IN, utc(2024, 5, 6, 20, 0))
    punches.add("e1", EntryType.PUNCH_OUT, utc(2024, 5, 7, 2, 30))

    svc = _service(utc_converter, engine, shifts, punches, profiles, company_settings)
    monday, tuesday = svc.reconcile_range("e1", MONDAY, date(2024, 5, 7), now=NOW)

    assert monday.source == RecordSource.ACTUAL
    assert monday.punch_in == utc(2024, 5, 6, 20, 0)
    assert monday.punch_out == utc(2024, 5, 7, 2, 30)
    assert monday.total_minutes == 390
    assert monday.lunch_minutes == 30
    assert tuesday.source == RecordSource.NONE


def test_overnight_punch_out_is_found_past_the_end_of_the_range(
    utc_converter, engine, shifts, punches, profiles, company_settings
):
    _overnight_setup(shifts, profiles, company_settings)
    punches.add("e1", EntryType.PUNCH_IN, utc(2024, 5, 6, 20, 0))
    punches.add("e1", EntryType.PUNCH_OUT, utc(2024, 5, 7, 2, 30))

    svc = _service(utc_converter, engine, shifts, punches, profiles, company_settings)
    [monday] = svc.reconcile_range("e1", MONDAY, MONDAY, now=NOW)

    assert monday.source == RecordSource.ACTUAL
    assert monday.punch_out == utc(2024, 5, 7, 2, 30)


def test_open_overnight_window_reports_ongoing_after_midnight(
    utc_converter, engine, shifts, punches, profiles, company_settings
):
    _overnight_setup(shifts, profiles, company_settings)
    punches.add("e1", EntryType.PUNCH_IN, utc(2024, 5, 6, 20, 0))

    svc = _service(utc_converter, engine, shifts, punches, profiles, company_settings)
    monday, tuesday = svc.reconcile_range("e1", MONDAY, date(2024, 5, 7), now=utc(2024, 5, 7, 1, 0))

    assert monday.source == RecordSource.ACTUAL
    assert monday.is_ongoing is True
    assert monday.total_minutes == 300
    assert tuesday.source == RecordSource.NONE


def test_open_overnight_punch_in_falls_back_to_schedule_once_closed(
    utc_converter, engine, shifts, punches, profiles, company_settings
):
    _overnight_setup(shifts, profiles, company_settings)
    punches.add("e1", EntryType.PUNCH_IN, utc(2024, 5, 6, 20, 0))

    svc = _service(utc_converter, engine, shifts, punches, profiles, company_settings)
    [monday] = svc.reconcile_range("e1", MONDAY, MONDAY, now=utc(2024, 5, 7, 3, 30))

    assert monday.source == RecordSource.SCHEDULE
    assert monday.punch_out == utc(2024, 5, 7, 2, 0)


def test_next_day_punch_out_is_carried_only_before_cutoff():
    monday = _events((EntryType.PUNCH_IN, utc(2024, 5, 6, 20, 0)))
    cutoff = utc(2024, 5, 7, 4, 0)

    early = _events((EntryType.PUNCH_OUT, utc(2024, 5, 7, 2, 30)))
    late = _events((EntryType.PUNCH_OUT, utc(2024, 5, 7, 5, 0)))
    new_day = _events((EntryType.PUNCH_IN, utc(2024, 5, 7, 1, 0)), (EntryType.PUNCH_OUT, utc(2024, 5, 7, 2, 0)))

    assert take_overnight_punch_out(monday, early, cutoff) == early[0]
    assert take_overnight_punch_out(monday, late, cutoff) is None
    assert take_overnight_punch_out(monday, new_day, cutoff) is None
    assert take_overnight_punch_out(monday, early, None) is None


def test_overnight_cutoff(engine):
    wrapping = weekly_hours("c1", {1: ("12:00", "03:00")})
    day_shift = _shift()

    assert engine.overnight_cutoff(work_date=MONDAY, shift=None, hours=wrapping) == utc(2024, 5, 7, 4, 0)
    assert engine.overnight_cutoff(work_date=MONDAY, shift=day_shift, hours=None) is None
    night_shift = Shift(
        shift_id=2,
        employee_id="e1",
        company_id="c1",
        start_time=utc(2024, 5, 6, 22, 0),
        end_time=utc(2024, 5, 7, 6, 0),
    )
    assert engine.overnight_cutoff(work_date=MONDAY, shift=night_shift, hours=wrapping) == utc(2024, 5, 7, 7, 0)
