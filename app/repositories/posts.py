from __future__ import annotations

from typing import Dict, List, Optional

from app.models import Post
from app.repositories.base import BaseRepository, from_db_timestamp, new_id, to_db_timestamp, utcnow

_COLUMNS = 'id, type, body, title, author_id, created_at, updated_at, deleted_at'
_UPDATABLE = ('type', 'body', 'title', 'author_id')


def _row_to_post(row) -> Post:
    return Post(
        id=row[0],
        type=row[1],
        body=row[2],
        title=row[3],
        author_id=row[4],
        created_at=from_db_timestamp(row[5]),
        updated_at=from_db_timestamp(row[6]),
        deleted_at=from_db_timestamp(row[7]),
    )


class PostRepository(BaseRepository):
    """Repository for posts."""

    def create(
        self,
        title: Optional[str],
        body: Optional[str] = None,
        post_type: Optional[str] = None,
        author_id: Optional[str] = None,
    ) -> Post:
        now = utcnow()
        post = Post(
            id=new_id(),
            type=post_type,
            body=body,
            title=title,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )
        self._execute(
            '''
            INSERT INTO posts (id, type, body, title, author_id, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ''',
            (post.id, post_type, body, title, author_id, to_db_timestamp(now), to_db_timestamp(now)),
        )
        return post

    def get_by_id(self, post_id: str, include_deleted: bool = False) -> Optional[Post]:
        row = self._fetchone(
            f'SELECT {_COLUMNS} FROM posts WHERE id = ?' + self._live_clause(include_deleted, 'AND'),
            (post_id,),
        )
        return _row_to_post(row) if row else None

    def find_by_title(self, title: str) -> Optional[Post]:
        """Return the oldest live post with exactly this title."""
        row = self._fetchone(
            f'SELECT {_COLUMNS} FROM posts WHERE title = ? AND deleted_at IS NULL ORDER BY created_at LIMIT 1',
            (title,),
        )
        return _row_to_post(row) if row else None

    def list_all(
        self,
        post_type: Optional[str] = None,
        author_id: Optional[str] = None,
        include_deleted: bool = False,
    ) -> List[Post]:
        conditions = []
        params = []
        if not include_deleted:
            conditions.append('deleted_at IS NULL')
        if post_type is not None:
            conditions.append('type = ?')
            params.append(post_type)
        if author_id is not None:
            conditions.append('author_id = ?')
            params.append(author_id)
        where = f" WHERE {' AND '.join(conditions)}" if conditions else ''
        rows = self._fetchall(f'SELECT {_COLUMNS} FROM posts{where} ORDER BY created_at DESC', params)
        return [_row_to_post(row) for row in rows]

    def update(self, post_id: str, changes: Dict[str, Optional[str]]) -> bool:
        """Apply column changes to a live post; ``None`` values clear the column."""
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update post columns: {', '.join(sorted(unknown))}")
        if not changes:
            return self.get_by_id(post_id) is not None
        assignments = ', '.join(f'{column} = ?' for column in changes)
        params = list(changes.values()) + [to_db_timestamp(utcnow()), post_id]
        return self._execute(
            f'UPDATE posts SET {assignments}, updated_at = ? WHERE id = ? AND deleted_at IS NULL',
            params,
        ) > 0

    def soft_delete(self, post_id: str) -> bool:
        return self._soft_delete('posts', post_id)

    def restore(self, post_id: str) -> bool:
        return self._restore('posts', post_id)

    def count(self, include_deleted: bool = False) -> int:
        row = self._fetchone('SELECT COUNT(*) FROM posts' + self._live_clause(include_deleted))
        return row[0] if row else 0
