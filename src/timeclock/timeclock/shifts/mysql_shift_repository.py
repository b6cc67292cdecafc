from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, to_db_datetime
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "id, employee_id, company_id, start_time, end_time, auto_punch_in, location, notes"


def _row_to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=int(r["id"]),
        employee_id=str(r["employee_id"]),
        company_id=r.get("company_id"),
        start_time=from_db_datetime(r["start_time"]),
        end_time=from_db_datetime(r["end_time"]),
        auto_punch_in=bool(r.get("auto_punch_in")),
        location=r.get("location"),
        notes=r.get("notes"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_auto_punch_in_candidates(self, *, now: datetime, lookahead_until: datetime) -> Sequence[Shift]:
        now_db = to_db_datetime(now)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE auto_punch_in = 1
                  AND (
                    (start_time >= %s AND start_time <= %s)
                    OR (start_time <= %s AND end_time >= %s)
                  )
                ORDER BY start_time ASC, id ASC
                """,
                (now_db, to_db_datetime(lookahead_until), now_db, now_db),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def list_starting_between(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[str] = None,
        company_id: Optional[str] = None,
    ) -> Sequence[Shift]:
        clauses = ["start_time >= %s", "start_time < %s"]
        params: list[object] = [to_db_datetime(start), to_db_datetime(end)]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(employee_id))
        if company_id is not None:
            clauses.append("company_id=%s")
            params.append(str(company_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE {where}
                ORDER BY start_time ASC, id ASC
                """,
                tuple(params),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]
