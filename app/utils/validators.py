"""Validation helpers for Chukfi."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple

EMAIL_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 255
POST_TYPE_MAX_LENGTH = 100
FULLNAME_MAX_LENGTH = 255
AUTHOR_ID_MAX_LENGTH = 36
PASSWORD_MIN_LENGTH = 6
MAX_PERMISSIONS = (1 << 63) - 1

_EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def validate_required_fields(data: Dict, required_fields: List[str]) -> Tuple[bool, str]:
    """Validate that required fields are present in a dictionary."""
    for field in required_fields:
        if field not in data or data[field] is None or data[field] == '':
            return False, f"Missing required field: {field}"
    return True, ""


def validate_email(email: Any) -> Tuple[bool, str]:
    """Validate an email address (shape only, no deliverability check)."""
    if not email:
        return False, "Email is required"
    if not isinstance(email, str):
        return False, "Email must be a string"
    if len(email) > EMAIL_MAX_LENGTH:
        return False, "Email is too long"
    if not _EMAIL_PATTERN.match(email):
        return False, "Email must look like name@example.com"
    return True, ""


def validate_permissions(value: Any) -> Tuple[bool, str]:
    """Validate a permissions bitmask."""
    if value is None:
        return False, "Permissions is required"
    if isinstance(value, bool) or not isinstance(value, int):
        return False, "Permissions must be an integer"
    if value < 0 or value > MAX_PERMISSIONS:
        return False, "Permissions must be a non-negative 63-bit integer"
    return True, ""


def validate_title(title: Any) -> Tuple[bool, str]:
    if not isinstance(title, str):
        return False, "Title must be a string"
    if len(title) > TITLE_MAX_LENGTH:
        return False, "Title is too long"
    return True, ""


def validate_post_type(post_type: Any) -> Tuple[bool, str]:
    if not isinstance(post_type, str):
        return False, "Type must be a string"
    if len(post_type) > POST_TYPE_MAX_LENGTH:
        return False, "Type is too long"
    return True, ""


def validate_author_id(author_id: Any) -> Tuple[bool, str]:
    if not isinstance(author_id, str):
        return False, "AuthorID must be a string"
    if len(author_id) > AUTHOR_ID_MAX_LENGTH:
        return False, "AuthorID is too long"
    return True, ""


def validate_fullname(fullname: Any) -> Tuple[bool, str]:
    if not fullname:
        return False, "Fullname is required"
    if not isinstance(fullname, str):
        return False, "Fullname must be a string"
    if len(fullname) > FULLNAME_MAX_LENGTH:
        return False, "Fullname is too long"
    return True, ""


def validate_password(password: Any) -> Tuple[bool, str]:
    """Validate a new plaintext password before hashing."""
    if not password:
        return False, "Password is required"
    if not isinstance(password, str):
        return False, "Password must be a string"
    if len(password) < PASSWORD_MIN_LENGTH:
        return False, f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    return True, ""


def validate_expires_at(value: Any) -> Tuple[bool, str]:
    """Validate an expiry given as seconds since the epoch."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False, "ExpiresAt must be an integer epoch"
    if value < 0:
        return False, "ExpiresAt must not be negative"
    return True, ""


def sanitize_string(value: str, max_length: int = 255) -> str:
    """Sanitize string input."""
    if not value:
        return ""
    value = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', str(value))
    return value[:max_length].strip()
