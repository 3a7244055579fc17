from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from app.models.base import parse_timestamp


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def to_db_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def from_db_timestamp(value: Optional[str]) -> Optional[datetime]:
    return parse_timestamp(value) if value else None


class BaseRepository:
    """Base repository with helpers to run queries."""

    def __init__(self, db_factory: Callable[[], sqlite3.Connection]):
        self._db_factory = db_factory

    def _execute(self, query: str, params: Iterable = ()) -> int:
        """Run a write statement and return the number of affected rows."""
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(query, tuple(params))
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    def _fetchone(self, query: str, params: Iterable = ()) -> Optional[tuple]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(query, tuple(params))
            return cursor.fetchone()
        finally:
            conn.close()

    def _fetchall(self, query: str, params: Iterable = ()) -> List[tuple]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(query, tuple(params))
            return cursor.fetchall()
        finally:
            conn.close()

    def _soft_delete(self, table: str, record_id: str) -> bool:
        now = to_db_timestamp(utcnow())
        return self._execute(
            f'UPDATE {table} SET deleted_at = ?, updated_at = ? WHERE id = ? AND deleted_at IS NULL',
            (now, now, record_id),
        ) > 0

    def _restore(self, table: str, record_id: str) -> bool:
        return self._execute(
            f'UPDATE {table} SET deleted_at = NULL, updated_at = ? WHERE id = ? AND deleted_at IS NOT NULL',
            (to_db_timestamp(utcnow()), record_id),
        ) > 0

    @staticmethod
    def _live_clause(include_deleted: bool, prefix: str = 'WHERE') -> str:
        return '' if include_deleted else f' {prefix} deleted_at IS NULL'
