"""
WSGI entry point for Chukfi
Use this with production WSGI servers like Gunicorn or uWSGI
"""
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(__file__))

from app.db import ensure_data_dir, init_db
from app.main import app

# Initialize database on startup
if __name__ != '__main__':
    # Only initialize when running under WSGI server, not when imported
    try:
        ensure_data_dir()
        init_db()
    except Exception as e:
        print(f"Error during initialization: {e}", file=sys.stderr)
        raise

# WSGI application
application = app

if __name__ == '__main__':
    # For development/testing only
    # In production, use: gunicorn -c gunicorn.conf.py wsgi:application
    port = int(os.environ.get('PORT', 3000))
    app.run(host='0.0.0.0', port=port, debug=False)
