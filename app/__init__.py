"""Application package for Chukfi."""

from __future__ import annotations

import logging

from flask import Flask, current_app, jsonify, request
from flask_login import UserMixin
from flask_talisman import Talisman

from app.config import Config
from app.db import get_db
from app.extensions import csrf, limiter, login_manager
from app.models import User
from app.permissions import registry
from app.repositories import ApiKeyRepository, PostRepository, UserRepository
from app.routes import (
    build_api_key_or_login_required,
    build_permission_required,
    create_api_keys_blueprint,
    create_auth_blueprint,
    create_health_blueprint,
    create_posts_blueprint,
    create_users_blueprint,
)
from app.services import AuthService
from app.services.auth_service import API_KEY_HEADER
from app.utils.validators import sanitize_string

VERSION = "1.0.0"

# Permissions the content routes check, on top of the built-in Admin bit
APP_PERMISSIONS = ('ViewPosts', 'EditPosts')

# JSON login has no CSRF token yet
CSRF_EXEMPT_ENDPOINTS = {'auth.api_login'}

logger = logging.getLogger(__name__)


class SessionUser(UserMixin):
    """Flask-Login wrapper around a ``User`` record."""

    def __init__(self, record: User):
        self.record = record
        self.id = record.id
        self.email = record.email
        self.fullname = record.fullname
        self.permissions = record.permissions


@login_manager.user_loader
def load_user(user_id):
    """Load user by ID for Flask-Login"""
    try:
        user = current_app.extensions['auth_service'].get_user_by_id(user_id)
        return SessionUser(user) if user else None
    except Exception as e:
        logger.error(f"Error loading user: {e}")
        return None


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'error': 'Authentication required'}), 401


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    # CSRF is enforced in protect_session_requests so API-key calls can skip it
    app.config['WTF_CSRF_CHECK_DEFAULT'] = False

    if not app.config.get('SECRET_KEY'):
        logger.warning("SECRET_KEY not set! Using insecure default. Generate a secure key with: python -c 'import secrets; print(secrets.token_hex(32))'")
        app.config['SECRET_KEY'] = 'dev-secret-key-change-in-production'

    csrf.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    # Only enforce HTTPS if explicitly enabled (for reverse proxy setups)
    if app.config.get('FORCE_HTTPS'):
        Talisman(
            app,
            force_https=True,
            strict_transport_security=True,
            content_security_policy={'default-src': "'self'"},
        )
    else:
        @app.after_request
        def set_security_headers(response):
            response.headers['X-Content-Type-Options'] = 'nosniff'
            response.headers['X-Frame-Options'] = 'SAMEORIGIN'
            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
            return response

    @app.before_request
    def protect_session_requests():
        if not app.config.get('WTF_CSRF_ENABLED', True):
            return None
        if request.headers.get(API_KEY_HEADER):
            return None
        if request.endpoint in CSRF_EXEMPT_ENDPOINTS:
            return None
        csrf.protect()
        return None

    for name in APP_PERMISSIONS:
        registry.ensure(name)

    user_repo = UserRepository(get_db)
    post_repo = PostRepository(get_db)
    api_key_repo = ApiKeyRepository(get_db)
    auth_service = AuthService(user_repo, api_key_repo)
    app.extensions['auth_service'] = auth_service

    api_key_or_login_required = build_api_key_or_login_required(auth_service, logger)
    permission_required = build_permission_required(registry)

    app.register_blueprint(create_health_blueprint(
        user_repo, post_repo, db_factory=get_db, version=VERSION, logger=logger,
    ))
    app.register_blueprint(create_auth_blueprint(
        auth_service=auth_service,
        user_repo=user_repo,
        user_class=SessionUser,
        registry=registry,
        limiter=limiter,
        api_key_or_login_required=api_key_or_login_required,
        logger=logger,
    ))
    app.register_blueprint(create_posts_blueprint(
        post_repo=post_repo,
        api_key_or_login_required=api_key_or_login_required,
        permission_required=permission_required,
        sanitize_string=sanitize_string,
        logger=logger,
    ))
    app.register_blueprint(create_users_blueprint(
        user_repo=user_repo,
        auth_service=auth_service,
        api_key_or_login_required=api_key_or_login_required,
        permission_required=permission_required,
        sanitize_string=sanitize_string,
        logger=logger,
    ))
    app.register_blueprint(create_api_keys_blueprint(
        auth_service=auth_service,
        api_key_repo=api_key_repo,
        user_repo=user_repo,
        api_key_or_login_required=api_key_or_login_required,
        permission_required=permission_required,
        logger=logger,
    ))

    return app
