from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EntryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import NewPunch, PunchEvent
from .repository import PunchRepository

_COLUMNS = "id, employee_id, company_id, entry_type, timestamp, is_automatic"


def _row_to_punch(r: Dict[str, Any]) -> PunchEvent:
    return PunchEvent(
        entry_id=int(r["id"]),
        employee_id=str(r["employee_id"]),
        company_id=r.get("company_id"),
        entry_type=EntryType(r["entry_type"]),
        timestamp=from_db_datetime(r["timestamp"]),
        is_automatic=bool(r.get("is_automatic")),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_employee(self, employee_id: str) -> Optional[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s
                ORDER BY timestamp DESC, id DESC
                LIMIT 1
                """,
                (str(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_punch(r) if r else None

    def list_latest_per_employee(self, *, company_id: Optional[str] = None) -> Sequence[PunchEvent]:
        where = "WHERE rn = 1"
        params: tuple = ()
        if company_id is not None:
            where += " AND company_id=%s"
            params = (str(company_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM (
                    SELECT {_COLUMNS},
                           ROW_NUMBER() OVER (PARTITION BY employee_id ORDER BY timestamp DESC, id DESC) AS rn
                    FROM time_entries
                ) latest
                {where}
                ORDER BY employee_id
                """,
                params,
            )
            return [_row_to_punch(r) for r in fetchall(cur)]

    def find_automatic_punch_in(self, *, employee_id: str, start: datetime, end: datetime) -> Optional[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s
                  AND entry_type=%s
                  AND is_automatic=1
                  AND timestamp >= %s AND timestamp <= %s
                ORDER BY timestamp ASC
                LIMIT 1
                """,
                (str(employee_id), EntryType.PUNCH_IN.value, to_db_datetime(start), to_db_datetime(end)),
            )
            r = fetchone(cur)
            return _row_to_punch(r) if r else None

    def list_for_employee_between(self, *, employee_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE employee_id=%s AND timestamp >= %s AND timestamp < %s
                ORDER BY timestamp ASC, id ASC
                """,
                (str(employee_id), to_db_datetime(start), to_db_datetime(end)),
            )
            return [_row_to_punch(r) for r in fetchall(cur)]

    def create(self, punch: NewPunch) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(employee_id, company_id, entry_type, timestamp, is_automatic)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    punch.employee_id,
                    punch.company_id,
                    punch.entry_type.value,
                    to_db_datetime(punch.timestamp),
                    1 if punch.is_automatic else 0,
                ),
            )
            return int(cur.lastrowid)

    def delete_for_employee_between(self, *, employee_id: str, start: datetime, end: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM time_entries
                WHERE employee_id=%s AND timestamp >= %s AND timestamp < %s
                """,
                (str(employee_id), to_db_datetime(start), to_db_datetime(end)),
            )
            return int(cur.rowcount)
