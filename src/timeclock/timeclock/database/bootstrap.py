"""Create the database and apply the SQL files under ``database/``."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List

from .connection import DatabaseConnection, DBConfig

_CREATE_DATABASE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DATABASE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def split_sql_statements(sql: str) -> Iterator[str]:
    """Yield the statements of a SQL script.

    ``--`` comment lines are dropped; ``;`` inside quoted literals does not
    end a statement. CREATE DATABASE / USE lines are skipped so the target
    database always comes from DB_CONFIG.
    """
    sql = _USE_DATABASE.sub("", _CREATE_DATABASE.sub("", sql))
    sql = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))

    current: List[str] = []
    quote = None
    escaped = False
    for ch in sql:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == ";":
            statement = "".join(current).strip()
            current = []
            if statement:
                yield statement
            continue
        current.append(ch)

    statement = "".join(current).strip()
    if statement:
        yield statement


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(db_config: dict, *, sql_path: str | Path) -> int:
    """Run every statement of ``sql_path`` in one transaction; returns the statement count."""
    statements = list(split_sql_statements(Path(sql_path).read_text(encoding="utf-8")))

    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
    return len(statements)


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    ensure_database_exists(db_config)
    return apply_sql_file(db_config, sql_path=schema_path)


def list_tables(db_config: dict) -> List[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
