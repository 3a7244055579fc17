from __future__ import annotations

import sys
from typing import Callable

from flask import Blueprint, jsonify


def create_health_blueprint(user_repo, post_repo, db_factory: Callable[[], object], version: str, logger):
    """Create health and version routes with injected dependencies."""
    blueprint = Blueprint('health', __name__)

    @blueprint.route('/health')
    def health_check():
        """Health check endpoint for orchestration and monitoring."""
        health = {
            'status': 'healthy',
            'version': version,
            'checks': {},
        }

        # Check database connectivity
        try:
            conn = db_factory()
            try:
                cursor = conn.cursor()
                cursor.execute('SELECT 1')
            finally:
                conn.close()
            health['checks']['database'] = {'status': 'ok'}
        except Exception as e:
            logger.error(f"Health check database failure: {e}")
            health['status'] = 'unhealthy'
            health['checks']['database'] = {'status': 'error', 'message': str(e)}

        status_code = 200 if health['status'] == 'healthy' else 503
        return jsonify(health), status_code

    @blueprint.route('/api/version')
    def get_version():
        """Get application version and content counts."""
        try:
            users = user_repo.count()
            posts = post_repo.count()
        except Exception as e:
            logger.warning(f"Failed to count records for version endpoint: {e}")
            users = 0
            posts = 0

        return jsonify({
            'version': version,
            'python_version': sys.version.split()[0],
            'api_version': 'v1',
            'users': users,
            'posts': posts,
        })

    return blueprint
