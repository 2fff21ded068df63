from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..core.constants import DATE_KEY_FORMAT
from ..core.exceptions import UpstreamFetchError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, operation: str = "query"):
    """Read-only cursor; driver errors surface as UpstreamFetchError."""
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("MySQL connect failed during %s: %s", operation, exc)
        raise UpstreamFetchError(f"{operation} failed: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield cur
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        logger.error("MySQL error during %s: %s", operation, exc)
        raise UpstreamFetchError(f"{operation} failed: {exc}") from exc
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for an ``IN (...)`` filter; callers skip the query when empty."""
    return ",".join(["%s"] * len(values))


def to_date_key(value: Any) -> str:
    """Normalize a MySQL DATE value (date, datetime or string) into YYYY-MM-DD."""

    if isinstance(value, datetime):
        return value.date().strftime(DATE_KEY_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_KEY_FORMAT)
    if isinstance(value, str):
        return value.strip()[:10]
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
