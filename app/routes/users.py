from __future__ import annotations

import sqlite3

from flask import Blueprint, jsonify, request

from app.utils.validators import (
    FULLNAME_MAX_LENGTH,
    validate_email,
    validate_fullname,
    validate_password,
    validate_permissions,
    validate_required_fields,
)


def create_users_blueprint(
    *,
    user_repo,
    auth_service,
    api_key_or_login_required,
    permission_required,
    sanitize_string,
    logger,
):
    """Create user administration routes with injected dependencies."""
    blueprint = Blueprint('users', __name__)

    def email_taken(email, exclude_id=None):
        existing = user_repo.get_by_email(email)
        return existing is not None and existing.id != exclude_id

    @blueprint.route('/api/users', methods=['GET'])
    @api_key_or_login_required
    @permission_required('Admin')
    def list_users():
        include_deleted = request.args.get('include_deleted', '').lower() in ('1', 'true', 'yes')
        users = user_repo.list_all(include_deleted=include_deleted)
        return jsonify([user.to_public_dict() for user in users])

    @blueprint.route('/api/users/<user_id>', methods=['GET'])
    @api_key_or_login_required
    @permission_required('Admin')
    def get_user(user_id):
        user = user_repo.get_by_id(user_id)
        if user is None:
            return jsonify({'error': 'User not found'}), 404
        return jsonify(user.to_public_dict())

    @blueprint.route('/api/users', methods=['POST'])
    @api_key_or_login_required
    @permission_required('Admin')
    def create_user():
        """Create an account; the password is stored as a bcrypt hash."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400

        valid, error = validate_required_fields(data, ['Fullname', 'Email', 'Password'])
        if not valid:
            return jsonify({'error': error}), 400

        fullname = sanitize_string(data['Fullname'], max_length=FULLNAME_MAX_LENGTH + 1) \
            if isinstance(data['Fullname'], str) else data['Fullname']
        email = data['Email'].strip() if isinstance(data['Email'], str) else data['Email']
        password = data['Password']
        permissions = data.get('Permissions', 0)

        for valid, error in (
            validate_fullname(fullname),
            validate_email(email),
            validate_password(password),
            validate_permissions(permissions),
        ):
            if not valid:
                return jsonify({'error': error}), 400

        if email_taken(email):
            return jsonify({'error': 'Email is already in use'}), 409

        try:
            user = user_repo.create(
                fullname=fullname,
                email=email,
                password_hash=auth_service.hash_password(password),
                permissions=permissions,
            )
        except sqlite3.IntegrityError:
            return jsonify({'error': 'Email is already in use'}), 409
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            return jsonify({'error': 'Failed to create user'}), 500

        logger.info(f"User {user.email} created by {request.auth_user.email}")
        return jsonify(user.to_public_dict()), 201

    @blueprint.route('/api/users/<user_id>', methods=['PUT', 'PATCH'])
    @api_key_or_login_required
    @permission_required('Admin')
    def update_user(user_id):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400

        if user_repo.get_by_id(user_id) is None:
            return jsonify({'error': 'User not found'}), 404

        changes = {}
        if 'Fullname' in data:
            fullname = data['Fullname']
            if isinstance(fullname, str):
                fullname = sanitize_string(fullname, max_length=FULLNAME_MAX_LENGTH + 1)
            valid, error = validate_fullname(fullname)
            if not valid:
                return jsonify({'error': error}), 400
            changes['fullname'] = fullname
        if 'Email' in data:
            email = data['Email'].strip() if isinstance(data['Email'], str) else data['Email']
            valid, error = validate_email(email)
            if not valid:
                return jsonify({'error': error}), 400
            if email_taken(email, exclude_id=user_id):
                return jsonify({'error': 'Email is already in use'}), 409
            changes['email'] = email
        if 'Permissions' in data:
            valid, error = validate_permissions(data['Permissions'])
            if not valid:
                return jsonify({'error': error}), 400
            changes['permissions'] = data['Permissions']

        password = data.get('Password')
        if password is not None:
            valid, error = validate_password(password)
            if not valid:
                return jsonify({'error': error}), 400

        if not changes and password is None:
            return jsonify({'error': 'No updatable fields supplied'}), 400

        try:
            if changes:
                user_repo.update(user_id, changes)
            if password is not None:
                user_repo.update_password(user_id, auth_service.hash_password(password))
        except sqlite3.IntegrityError:
            return jsonify({'error': 'Email is already in use'}), 409
        except Exception as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            return jsonify({'error': 'Failed to update user'}), 500

        logger.info(f"User {user_id} updated by {request.auth_user.email}")
        return jsonify(user_repo.get_by_id(user_id).to_public_dict())

    @blueprint.route('/api/users/<user_id>', methods=['DELETE'])
    @api_key_or_login_required
    @permission_required('Admin')
    def delete_user(user_id):
        """Soft-delete an account."""
        if user_id == request.auth_user.id:
            return jsonify({'error': 'You cannot delete your own account'}), 400
        if not user_repo.soft_delete(user_id):
            return jsonify({'error': 'User not found'}), 404
        logger.info(f"User {user_id} deleted by {request.auth_user.email}")
        return jsonify({'success': True})

    return blueprint
