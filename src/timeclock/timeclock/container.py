from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .business_hours.mysql_company_settings_repository import MySQLCompanySettingsRepository
from .business_hours.repository import CompanySettingsRepository
from .business_hours.resolver import BusinessHoursResolver
from .common.datetime_utils import now_utc
from .common.timezone import TimeZoneConverter
from .core.constants import DEFAULT_BUSINESS_TIMEZONE, DEFAULT_HOOK_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .jobs.auto_punch_in import AutoPunchInJob
from .jobs.auto_punch_out import AutoPunchOutJob
from .jobs.hooks import PunchInHook, build_punch_in_hook
from .jobs.normalizer import EntryNormalizer
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .reconciliation.engine import ReconciliationEngine
from .reconciliation.service import ReconciliationService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository


@dataclass(frozen=True)
class Container:
    shifts_repo: ShiftRepository
    punches_repo: PunchRepository
    profiles_repo: ProfileRepository
    company_settings_repo: CompanySettingsRepository

    converter: TimeZoneConverter
    resolver: BusinessHoursResolver
    reconciliation_engine: ReconciliationEngine
    reconciliation_service: ReconciliationService
    normalizer: EntryNormalizer
    auto_punch_in_job: AutoPunchInJob
    auto_punch_out_job: AutoPunchOutJob

    clock: Callable[[], datetime] = now_utc


def assemble_container(
    *,
    shifts_repo: ShiftRepository,
    punches_repo: PunchRepository,
    profiles_repo: ProfileRepository,
    company_settings_repo: CompanySettingsRepository,
    timezone_name: str = DEFAULT_BUSINESS_TIMEZONE,
    punch_in_hook: Optional[PunchInHook] = None,
    clock: Callable[[], datetime] = now_utc,
) -> Container:
    """Wire services on top of already-built repositories."""
    converter = TimeZoneConverter(timezone_name)
    resolver = BusinessHoursResolver(converter)
    engine = ReconciliationEngine(converter, resolver)
    normalizer = EntryNormalizer(shifts_repo, punches_repo, converter)

    return Container(
        shifts_repo=shifts_repo,
        punches_repo=punches_repo,
        profiles_repo=profiles_repo,
        company_settings_repo=company_settings_repo,
        converter=converter,
        resolver=resolver,
        reconciliation_engine=engine,
        reconciliation_service=ReconciliationService(
            shifts_repo, punches_repo, profiles_repo, company_settings_repo, engine, converter
        ),
        normalizer=normalizer,
        auto_punch_in_job=AutoPunchInJob(shifts_repo, punches_repo, profiles_repo, punch_in_hook),
        auto_punch_out_job=AutoPunchOutJob(
            shifts_repo, punches_repo, company_settings_repo, resolver, converter, normalizer
        ),
        clock=clock,
    )


def build_container(
    *,
    db_config: dict,
    timezone_name: str = DEFAULT_BUSINESS_TIMEZONE,
    hook_url: Optional[str] = None,
    hook_timeout: float = DEFAULT_HOOK_TIMEOUT_SECONDS,
    hook_token: Optional[str] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble_container(
        shifts_repo=MySQLShiftRepository(conn),
        punches_repo=MySQLPunchRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        company_settings_repo=MySQLCompanySettingsRepository(conn),
        timezone_name=timezone_name,
        punch_in_hook=build_punch_in_hook(hook_url, timeout=hook_timeout, token=hook_token),
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_config=dict(getattr(settings, "DB_CONFIG")),
        timezone_name=getattr(settings, "BUSINESS_TIMEZONE", DEFAULT_BUSINESS_TIMEZONE),
        hook_url=getattr(settings, "PUNCH_IN_HOOK_URL", None),
        hook_timeout=float(getattr(settings, "PUNCH_IN_HOOK_TIMEOUT", DEFAULT_HOOK_TIMEOUT_SECONDS)),
        hook_token=getattr(settings, "PUNCH_IN_HOOK_TOKEN", None),
    )
