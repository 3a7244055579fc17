from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from app.models.base import Record, record_field
from app.utils.validators import validate_email, validate_permissions


@dataclass(kw_only=True)
class User(Record):
    """Account record. ``password`` is the stored (bcrypt) form, never plaintext."""
    id: str = record_field('ID', str, required=True)
    created_at: Optional[datetime] = record_field('CreatedAt', datetime, ts_type='Date')
    updated_at: Optional[datetime] = record_field('UpdatedAt', datetime, ts_type='Date')
    deleted_at: Optional[datetime] = record_field('DeletedAt', datetime, ts_type='any')
    fullname: str = record_field('Fullname', str, required=True)
    email: str = record_field('Email', str, required=True)
    password: str = record_field('Password', str, required=True, secret=True)
    permissions: int = record_field('Permissions', int, required=True)

    def validate(self) -> Tuple[bool, str]:
        valid, error = super().validate()
        if valid:
            valid, error = validate_email(self.email)
        if valid:
            valid, error = validate_permissions(self.permissions)
        return valid, error
