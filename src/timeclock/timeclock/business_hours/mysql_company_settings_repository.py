from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import BusinessHours, parse_business_hours
from .repository import CompanySettingsRepository


class MySQLCompanySettingsRepository(CompanySettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_company_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT company_id FROM company_settings ORDER BY company_id")
            return [str(r["company_id"]) for r in fetchall(cur)]

    def get_business_hours(self, company_id: str) -> Optional[BusinessHours]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT company_id, business_hours FROM company_settings WHERE company_id=%s",
                (str(company_id),),
            )
            r = fetchone(cur)

        if not r or r.get("business_hours") in (None, "", "[]"):
            return None
        return parse_business_hours(str(r["company_id"]), r["business_hours"])
