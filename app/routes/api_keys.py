from __future__ import annotations

import time

from flask import Blueprint, jsonify, request

from app.utils.validators import validate_email

SECONDS_PER_DAY = 86400
MAX_EXPIRES_DAYS = 36500


def create_api_keys_blueprint(
    *,
    auth_service,
    api_key_repo,
    user_repo,
    api_key_or_login_required,
    permission_required,
    logger,
):
    """Create API key routes with injected dependencies."""
    blueprint = Blueprint('api_keys', __name__)

    @blueprint.route('/api/keys', methods=['GET'])
    @api_key_or_login_required
    @permission_required('Admin')
    def list_api_keys():
        """List live API keys (hashes are never returned)."""
        try:
            owner = request.args.get('owner')
            keys = api_key_repo.list_for_owner(owner) if owner else api_key_repo.list_all()
            return jsonify([key.to_public_dict() for key in keys])
        except Exception as e:
            logger.error(f"Failed to list API keys: {e}")
            return jsonify({'error': 'Failed to list keys'}), 500

    @blueprint.route('/api/keys', methods=['POST'])
    @api_key_or_login_required
    @permission_required('Admin')
    def create_api_key():
        """Issue a new API key for an existing user."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400

        owner_email = data.get('owner_email') or request.auth_user.email
        valid, error = validate_email(owner_email)
        if not valid:
            return jsonify({'error': error}), 400
        if user_repo.get_by_email(owner_email) is None:
            return jsonify({'error': f'No user with email {owner_email}'}), 400

        expires_at = None
        expires_days = data.get('expires_days')
        if expires_days is not None:
            if isinstance(expires_days, bool):
                return jsonify({'error': 'Invalid expires_days value'}), 400
            try:
                expires_days = int(expires_days)
            except (TypeError, ValueError, OverflowError):
                return jsonify({'error': 'Invalid expires_days value'}), 400
            if not 1 <= expires_days <= MAX_EXPIRES_DAYS:
                return jsonify({'error': f'expires_days must be between 1 and {MAX_EXPIRES_DAYS}'}), 400
            expires_at = int(time.time()) + expires_days * SECONDS_PER_DAY

        try:
            record, token = auth_service.issue_api_key(owner_email, expires_at)
        except Exception as e:
            logger.error(f"Failed to create API key: {e}")
            return jsonify({'error': 'Failed to create key'}), 500

        logger.info(f"API key {record.id} created for {owner_email} by {request.auth_user.email}")

        payload = record.to_public_dict()
        payload['Token'] = token
        payload['message'] = 'Save this key now - it will not be shown again!'
        return jsonify(payload), 201

    @blueprint.route('/api/keys/<key_id>', methods=['DELETE'])
    @api_key_or_login_required
    @permission_required('Admin')
    def delete_api_key(key_id):
        """Revoke (soft-delete) an API key."""
        try:
            if not api_key_repo.soft_delete(key_id):
                return jsonify({'error': 'Key not found'}), 404
            logger.info(f"API key {key_id} deleted by {request.auth_user.email}")
            return jsonify({'success': True})
        except Exception as e:
            logger.error(f"Failed to delete API key: {e}")
            return jsonify({'error': 'Failed to delete key'}), 500

    return blueprint
