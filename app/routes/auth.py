from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf

from app.utils.validators import sanitize_string, validate_password


def create_auth_blueprint(
    *,
    auth_service,
    user_repo,
    user_class,
    registry,
    limiter,
    api_key_or_login_required,
    logger,
):
    """Create authentication routes with injected dependencies."""
    blueprint = Blueprint('auth', __name__)

    @blueprint.route('/api/login', methods=['POST'])
    @limiter.limit('10 per minute')
    def api_login():
        """Session login for API and SPA clients."""
        if current_user.is_authenticated:
            return jsonify({'success': True, 'user': current_user.record.to_public_dict()})

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = request.form
        email = sanitize_string(data.get('email', ''), max_length=100)
        password = data.get('password', '')

        if not email or not password:
            return jsonify({'error': 'Email and password are required'}), 400

        try:
            user = auth_service.authenticate(email, password)
            if user is None:
                return jsonify({'error': 'Invalid email or password'}), 401

            login_user(user_class(user))
            logger.info(f"User {user.email} logged in")
            return jsonify({'success': True, 'user': user.to_public_dict()})
        except Exception as e:
            logger.error(f"API login error: {e}")
            return jsonify({'error': 'Login failed'}), 500

    @blueprint.route('/api/logout', methods=['POST'])
    def api_logout():
        """Session logout."""
        if not current_user.is_authenticated:
            return jsonify({'success': True})
        email = current_user.email
        logout_user()
        logger.info(f"User {email} logged out")
        return jsonify({'success': True})

    @blueprint.route('/api/csrf-token')
    def csrf_token():
        return jsonify({'csrf_token': generate_csrf()})

    @blueprint.route('/api/whoami')
    @api_key_or_login_required
    def whoami():
        """Return the authenticated user and their permission names."""
        user = request.auth_user
        return jsonify({
            'user': user.to_public_dict(),
            'permissions': registry.names_for(user.permissions),
            'via_api_key': request.api_key_auth,
        })

    @blueprint.route('/api/user/change-password', methods=['POST'])
    @login_required
    def change_password():
        """Change current user's password."""
        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                data = {}
            current_password = data.get('current_password', '')
            new_password = data.get('new_password', '')
            confirm_password = data.get('confirm_password', '')

            if not current_password or not new_password or not confirm_password:
                return jsonify({'error': 'All fields are required'}), 400

            if new_password != confirm_password:
                return jsonify({'error': 'New passwords do not match'}), 400

            valid, error = validate_password(new_password)
            if not valid:
                return jsonify({'error': error}), 400

            user = user_repo.get_by_id(current_user.id)
            if user is None:
                return jsonify({'error': 'User not found'}), 404

            if not auth_service.check_password(current_password, user.password):
                return jsonify({'error': 'Current password is incorrect'}), 400

            user_repo.update_password(user.id, auth_service.hash_password(new_password))

            logger.info(f"User {user.email} changed their password")
            return jsonify({'success': True, 'message': 'Password changed successfully'})

        except Exception as e:
            logger.error(f"Error changing password: {e}")
            return jsonify({'error': 'Failed to change password'}), 500

    return blueprint
