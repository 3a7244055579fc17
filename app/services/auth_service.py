from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import time
from typing import Optional, Tuple

import bcrypt

from app.models import ApiKey, User
from app.repositories import ApiKeyRepository, UserRepository

logger = logging.getLogger(__name__)

API_KEY_PREFIX = 'chukfi_'
API_KEY_HEADER = 'X-API-Key'

REASON_INVALID = 'invalid'
REASON_EXPIRED = 'expired'
REASON_OWNER_MISSING = 'owner-missing'


def generate_api_key() -> str:
    """Generate a new API key"""
    return f"{API_KEY_PREFIX}{secrets.token_urlsafe(32)}"


def hash_api_key(key: str) -> str:
    """Hash an API key for storage"""
    return hashlib.sha256(key.encode()).hexdigest()


def verify_api_key(key: str, key_hash: str) -> bool:
    """Verify an API key against its hash using constant-time comparison"""
    return hmac.compare_digest(hash_api_key(key), key_hash)


class AuthService:
    """Authentication and authorization logic."""

    def __init__(self, user_repo: UserRepository, api_key_repo: ApiKeyRepository):
        self._user_repo = user_repo
        self._api_key_repo = api_key_repo

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    @staticmethod
    def check_password(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
        except ValueError:
            logger.warning("Stored password is not a bcrypt hash")
            return False

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self._user_repo.get_by_id(user_id)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the live user matching the credentials, or ``None``."""
        user = self._user_repo.get_by_email(email)
        if user is None or not self.check_password(password, user.password):
            return None
        return user

    def issue_api_key(self, owner_email: str, expires_at: Optional[int] = None) -> Tuple[ApiKey, str]:
        """Create a key record and return it with the plaintext token.

        Only the hash is persisted; the token cannot be recovered later.
        """
        token = generate_api_key()
        record = self._api_key_repo.create(hash_api_key(token), owner_email, expires_at)
        return record, token

    def resolve_api_key(self, token: str, now: Optional[float] = None) -> Tuple[Optional[User], Optional[str]]:
        """Map a presented token to its owner.

        Returns ``(user, None)`` on success, else ``(None, reason)``.
        """
        if not token or not token.startswith(API_KEY_PREFIX):
            return None, REASON_INVALID
        key_hash = hash_api_key(token)
        record = self._api_key_repo.get_by_key(key_hash)
        if record is None or not verify_api_key(token, record.key or ''):
            return None, REASON_INVALID
        if record.is_expired(time.time() if now is None else now):
            return None, REASON_EXPIRED
        if not record.owner_email:
            return None, REASON_OWNER_MISSING
        user = self._user_repo.get_by_email(record.owner_email)
        if user is None:
            logger.warning(f"API key {record.id} belongs to missing user {record.owner_email}")
            return None, REASON_OWNER_MISSING
        return user, None
