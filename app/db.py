from __future__ import annotations

import logging
import os
import sqlite3
import uuid
from datetime import datetime, timezone

import bcrypt

from app.config import Config
from app.permissions import ADMIN_BIT

logger = logging.getLogger(__name__)

DATABASE_PATH = Config.DATABASE_PATH


def _get_database_path() -> str:
    """Resolve database path at runtime (supports tests overriding env)."""
    return os.getenv('DATABASE_PATH', DATABASE_PATH)


def get_db() -> sqlite3.Connection:
    """Get database connection."""
    return sqlite3.connect(_get_database_path())


def init_db() -> None:
    """Initialize SQLite database."""
    conn = sqlite3.connect(_get_database_path())
    cursor = conn.cursor()

    # Create users table
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            fullname TEXT NOT NULL,
            email TEXT NOT NULL,
            password TEXT NOT NULL,
            permissions INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP,
            updated_at TIMESTAMP,
            deleted_at TIMESTAMP
        )
    ''')

    # Create posts table
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS posts (
            id TEXT PRIMARY KEY,
            type TEXT,
            body TEXT,
            title TEXT,
            author_id TEXT,
            created_at TIMESTAMP,
            updated_at TIMESTAMP,
            deleted_at TIMESTAMP
        )
    ''')

    # Create api_keys table (key holds the SHA-256 of the issued token)
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS api_keys (
            id TEXT PRIMARY KEY,
            key TEXT UNIQUE,
            owner_email TEXT,
            expires_at INTEGER,
            created_at TIMESTAMP,
            updated_at TIMESTAMP,
            deleted_at TIMESTAMP
        )
    ''')

    # Live emails are unique; soft-deleted accounts keep theirs
    cursor.execute(
        'CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email ON users(email COLLATE NOCASE) WHERE deleted_at IS NULL'
    )
    cursor.execute('CREATE INDEX IF NOT EXISTS idx_users_deleted_at ON users(deleted_at)')

    cursor.execute('CREATE INDEX IF NOT EXISTS idx_posts_title ON posts(title)')
    cursor.execute('CREATE INDEX IF NOT EXISTS idx_posts_author_id ON posts(author_id)')
    cursor.execute('CREATE INDEX IF NOT EXISTS idx_posts_deleted_at ON posts(deleted_at)')

    cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_keys_owner_email ON api_keys(owner_email)')
    cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_keys_expires_at ON api_keys(expires_at)')
    cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_keys_deleted_at ON api_keys(deleted_at)')

    # Create default admin user if no users exist
    cursor.execute('SELECT COUNT(*) FROM users')
    user_count = cursor.fetchone()[0]
    if user_count == 0:
        admin_email = os.getenv('DEFAULT_ADMIN_EMAIL', Config.DEFAULT_ADMIN_EMAIL)
        default_password = os.getenv('DEFAULT_ADMIN_PASSWORD', Config.DEFAULT_ADMIN_PASSWORD)
        password_hash = bcrypt.hashpw(default_password.encode('utf-8'), bcrypt.gensalt())
        now = datetime.now(timezone.utc).isoformat()
        cursor.execute('''
            INSERT INTO users (id, fullname, email, password, permissions, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        ''', (str(uuid.uuid4()), 'Administrator', admin_email, password_hash.decode('utf-8'), ADMIN_BIT, now, now))
        logger.info(f"Created default admin user ({admin_email}) - PLEASE CHANGE THE PASSWORD!")

    conn.commit()
    conn.close()
    logger.info('Database initialized')


def ensure_data_dir() -> None:
    data_dir = os.path.dirname(_get_database_path()) or '.'
    os.makedirs(data_dir, exist_ok=True)
