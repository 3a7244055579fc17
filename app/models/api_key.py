from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from app.models.base import Record, record_field
from app.utils.validators import validate_email, validate_expires_at


@dataclass(kw_only=True)
class ApiKey(Record):
    """Issued API credential. ``key`` holds the SHA-256 of the token."""
    id: str = record_field('ID', str, required=True)
    created_at: Optional[datetime] = record_field('CreatedAt', datetime)
    updated_at: Optional[datetime] = record_field('UpdatedAt', datetime)
    deleted_at: Optional[datetime] = record_field('DeletedAt', datetime)
    key: Optional[str] = record_field('Key', str, secret=True)
    owner_email: Optional[str] = record_field('OwnerEmail', str)
    expires_at: Optional[int] = record_field('ExpiresAt', int)

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        if now is None:
            now = time.time()
        return self.expires_at <= now

    def validate(self) -> Tuple[bool, str]:
        valid, error = super().validate()
        if valid and self.owner_email is not None:
            valid, error = validate_email(self.owner_email)
        if valid and self.expires_at is not None:
            valid, error = validate_expires_at(self.expires_at)
        return valid, error
