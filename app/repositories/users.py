from __future__ import annotations

from typing import Dict, List, Optional

from app.models import User
from app.repositories.base import BaseRepository, from_db_timestamp, new_id, to_db_timestamp, utcnow

_COLUMNS = 'id, fullname, email, password, permissions, created_at, updated_at, deleted_at'
_UPDATABLE = ('fullname', 'email', 'permissions')


def _row_to_user(row) -> User:
    return User(
        id=row[0],
        fullname=row[1],
        email=row[2],
        password=row[3],
        permissions=row[4],
        created_at=from_db_timestamp(row[5]),
        updated_at=from_db_timestamp(row[6]),
        deleted_at=from_db_timestamp(row[7]),
    )


class UserRepository(BaseRepository):
    """Repository for users."""

    def create(self, fullname: str, email: str, password_hash: str, permissions: int = 0) -> User:
        now = utcnow()
        user = User(
            id=new_id(),
            fullname=fullname,
            email=email,
            password=password_hash,
            permissions=permissions,
            created_at=now,
            updated_at=now,
        )
        self._execute(
            '''
            INSERT INTO users (id, fullname, email, password, permissions, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ''',
            (user.id, fullname, email, password_hash, permissions, to_db_timestamp(now), to_db_timestamp(now)),
        )
        return user

    def get_by_id(self, user_id: str, include_deleted: bool = False) -> Optional[User]:
        row = self._fetchone(
            f'SELECT {_COLUMNS} FROM users WHERE id = ?' + self._live_clause(include_deleted, 'AND'),
            (user_id,),
        )
        return _row_to_user(row) if row else None

    def get_by_email(self, email: str, include_deleted: bool = False) -> Optional[User]:
        row = self._fetchone(
            f'SELECT {_COLUMNS} FROM users WHERE email = ? COLLATE NOCASE'
            + self._live_clause(include_deleted, 'AND')
            + ' ORDER BY created_at DESC',
            (email,),
        )
        return _row_to_user(row) if row else None

    def list_all(self, include_deleted: bool = False) -> List[User]:
        rows = self._fetchall(
            f'SELECT {_COLUMNS} FROM users' + self._live_clause(include_deleted) + ' ORDER BY created_at',
        )
        return [_row_to_user(row) for row in rows]

    def update(self, user_id: str, changes: Dict[str, object]) -> bool:
        """Apply column changes to a live user. Unknown columns raise ``ValueError``."""
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update user columns: {', '.join(sorted(unknown))}")
        if not changes:
            return self.get_by_id(user_id) is not None
        assignments = ', '.join(f'{column} = ?' for column in changes)
        params = list(changes.values()) + [to_db_timestamp(utcnow()), user_id]
        return self._execute(
            f'UPDATE users SET {assignments}, updated_at = ? WHERE id = ? AND deleted_at IS NULL',
            params,
        ) > 0

    def update_password(self, user_id: str, password_hash: str) -> bool:
        return self._execute(
            'UPDATE users SET password = ?, updated_at = ? WHERE id = ? AND deleted_at IS NULL',
            (password_hash, to_db_timestamp(utcnow()), user_id),
        ) > 0

    def soft_delete(self, user_id: str) -> bool:
        return self._soft_delete('users', user_id)

    def restore(self, user_id: str) -> bool:
        return self._restore('users', user_id)

    def count(self, include_deleted: bool = False) -> int:
        row = self._fetchone('SELECT COUNT(*) FROM users' + self._live_clause(include_deleted))
        return row[0] if row else 0
