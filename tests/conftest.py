import pytest

from src.timeclock.timeclock.business_hours.resolver import BusinessHoursResolver
from src.timeclock.timeclock.common.timezone import TimeZoneConverter

from tests.fakes import InMemoryCompanySettings, InMemoryProfiles, InMemoryPunches, InMemoryShifts, utc


@pytest.fixture
def utc_converter():
    return TimeZoneConverter("UTC")


@pytest.fixture
def resolver(utc_converter):
    return BusinessHoursResolver(utc_converter)


@pytest.fixture
def shifts():
    return InMemoryShifts()


@pytest.fixture
def punches():
    return InMemoryPunches()


@pytest.fixture
def profiles():
    return InMemoryProfiles()


@pytest.fixture
def company_settings():
    return InMemoryCompanySettings()


@pytest.fixture
def fixed_now():
    # Monday
    return utc(2024, 5, 6, 9, 3)
