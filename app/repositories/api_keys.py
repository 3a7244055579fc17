from __future__ import annotations

from typing import List, Optional

from app.models import ApiKey
from app.repositories.base import BaseRepository, from_db_timestamp, new_id, to_db_timestamp, utcnow

_COLUMNS = 'id, key, owner_email, expires_at, created_at, updated_at, deleted_at'


def _row_to_api_key(row) -> ApiKey:
    return ApiKey(
        id=row[0],
        key=row[1],
        owner_email=row[2],
        expires_at=row[3],
        created_at=from_db_timestamp(row[4]),
        updated_at=from_db_timestamp(row[5]),
        deleted_at=from_db_timestamp(row[6]),
    )


class ApiKeyRepository(BaseRepository):
    """Repository for API keys."""

    def create(self, key_hash: str, owner_email: Optional[str], expires_at: Optional[int] = None) -> ApiKey:
        now = utcnow()
        api_key = ApiKey(
            id=new_id(),
            key=key_hash,
            owner_email=owner_email,
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
        )
        self._execute(
            '''
            INSERT INTO api_keys (id, key, owner_email, expires_at, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ''',
            (api_key.id, key_hash, owner_email, expires_at, to_db_timestamp(now), to_db_timestamp(now)),
        )
        return api_key

    def get_by_id(self, key_id: str, include_deleted: bool = False) -> Optional[ApiKey]:
        row = self._fetchone(
            f'SELECT {_COLUMNS} FROM api_keys WHERE id = ?' + self._live_clause(include_deleted, 'AND'),
            (key_id,),
        )
        return _row_to_api_key(row) if row else None

    def get_by_key(self, key_hash: str) -> Optional[ApiKey]:
        row = self._fetchone(
            f'SELECT {_COLUMNS} FROM api_keys WHERE key = ? AND deleted_at IS NULL',
            (key_hash,),
        )
        return _row_to_api_key(row) if row else None

    def list_all(self, include_deleted: bool = False) -> List[ApiKey]:
        rows = self._fetchall(
            f'SELECT {_COLUMNS} FROM api_keys' + self._live_clause(include_deleted) + ' ORDER BY created_at DESC',
        )
        return [_row_to_api_key(row) for row in rows]

    def list_for_owner(self, owner_email: str) -> List[ApiKey]:
        rows = self._fetchall(
            f'''
            SELECT {_COLUMNS} FROM api_keys
            WHERE owner_email = ? COLLATE NOCASE AND deleted_at IS NULL
            ORDER BY created_at DESC
            ''',
            (owner_email,),
        )
        return [_row_to_api_key(row) for row in rows]

    def soft_delete(self, key_id: str) -> bool:
        return self._soft_delete('api_keys', key_id)
