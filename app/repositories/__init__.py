"""repositories package."""
from .api_keys import ApiKeyRepository
from .base import BaseRepository
from .posts import PostRepository
from .users import UserRepository

__all__ = [
    'ApiKeyRepository',
    'BaseRepository',
    'PostRepository',
    'UserRepository',
]
