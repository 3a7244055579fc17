"""Routes package."""
from .api_keys import create_api_keys_blueprint
from .auth import create_auth_blueprint
from .decorators import build_api_key_or_login_required, build_permission_required
from .health import create_health_blueprint
from .posts import create_posts_blueprint
from .users import create_users_blueprint

__all__ = [
    'build_api_key_or_login_required',
    'build_permission_required',
    'create_api_keys_blueprint',
    'create_auth_blueprint',
    'create_health_blueprint',
    'create_posts_blueprint',
    'create_users_blueprint',
]
