from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from app.models.base import Record, record_field
from app.utils.validators import validate_post_type, validate_title


@dataclass(kw_only=True)
class Post(Record):
    id: str = record_field('ID', str, required=True)
    created_at: Optional[datetime] = record_field('CreatedAt', datetime)
    updated_at: Optional[datetime] = record_field('UpdatedAt', datetime)
    deleted_at: Optional[datetime] = record_field('DeletedAt', datetime)
    type: Optional[str] = record_field('Type', str)
    body: Optional[str] = record_field('Body', str)
    title: Optional[str] = record_field('Title', str)
    author_id: Optional[str] = record_field('AuthorID', str)

    def validate(self) -> Tuple[bool, str]:
        valid, error = super().validate()
        if valid and self.title is not None:
            valid, error = validate_title(self.title)
        if valid and self.type is not None:
            valid, error = validate_post_type(self.type)
        return valid, error
