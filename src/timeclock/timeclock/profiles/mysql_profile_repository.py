from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Profile
from .repository import ProfileRepository


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, company_id, full_name FROM profiles WHERE user_id=%s",
                (str(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Profile(user_id=str(r["user_id"]), company_id=r.get("company_id"), full_name=r.get("full_name"))
