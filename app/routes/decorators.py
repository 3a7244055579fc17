"""Authentication decorators shared by the API blueprints."""
from __future__ import annotations

from functools import wraps

from flask import jsonify, request
from flask_login import current_user

from app.permissions import PermissionRegistry
from app.services.auth_service import API_KEY_HEADER, API_KEY_PREFIX, REASON_EXPIRED, AuthService


def build_api_key_or_login_required(auth_service: AuthService, logger):
    """Build a decorator allowing either session auth or API key auth.

    The authenticated ``User`` record is stored on ``request.auth_user``.
    """

    def api_key_or_login_required(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            api_key = request.headers.get(API_KEY_HEADER)
            if api_key:
                if not api_key.startswith(API_KEY_PREFIX):
                    return jsonify({'error': 'Invalid API key format'}), 401

                user, reason = auth_service.resolve_api_key(api_key)
                if user is None:
                    if reason == REASON_EXPIRED:
                        return jsonify({'error': 'API key expired'}), 401
                    logger.info(f"Rejected API key ({reason}) from {request.remote_addr}")
                    return jsonify({'error': 'Invalid API key'}), 401

                request.api_key_auth = True
                request.auth_user = user
                return f(*args, **kwargs)

            if current_user.is_authenticated:
                request.api_key_auth = False
                request.auth_user = current_user.record
                return f(*args, **kwargs)

            return jsonify({'error': 'Authentication required'}), 401

        return decorated_function

    return api_key_or_login_required


def build_permission_required(registry: PermissionRegistry):
    """Build a decorator factory checking a named permission bit.

    Must be applied inside ``api_key_or_login_required``.
    """

    def permission_required(name: str):
        registry.value_of(name)

        def decorator(f):
            @wraps(f)
            def decorated_function(*args, **kwargs):
                user = getattr(request, 'auth_user', None)
                if user is None:
                    return jsonify({'error': 'Authentication required'}), 401
                if not registry.has(user.permissions, name):
                    return jsonify({'error': f'{name} permission required'}), 403
                return f(*args, **kwargs)

            return decorated_function

        return decorator

    return permission_required
