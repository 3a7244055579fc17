"""Persisted records of the CMS."""
from .api_key import ApiKey
from .base import Record, RecordError
from .post import Post
from .user import User

__all__ = [
    'ApiKey',
    'Post',
    'Record',
    'RecordError',
    'User',
]
