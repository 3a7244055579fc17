"""
Pytest fixtures for Chukfi tests
"""
import os
import tempfile

import pytest

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'admin'


@pytest.fixture
def app():
    """Create application for testing"""
    # Use a temporary database for tests
    db_fd, db_path = tempfile.mkstemp(suffix='.db')

    # Set environment variables before the database is initialized
    os.environ['DATABASE_PATH'] = db_path
    os.environ['SECRET_KEY'] = 'test-secret-key-for-testing'
    os.environ['DEFAULT_ADMIN_EMAIL'] = ADMIN_EMAIL
    os.environ['DEFAULT_ADMIN_PASSWORD'] = ADMIN_PASSWORD

    from app import create_app
    from app.config import TestingConfig
    from app.db import init_db

    flask_app = create_app(TestingConfig)

    # Initialize the test database
    init_db()

    yield flask_app

    # Cleanup
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def user_repo(app):
    from app.db import get_db
    from app.repositories import UserRepository

    return UserRepository(get_db)


@pytest.fixture
def auth_service(app):
    return app.extensions['auth_service']


@pytest.fixture
def admin_user(user_repo):
    return user_repo.get_by_email(ADMIN_EMAIL)


@pytest.fixture
def authenticated_client(client, admin_user):
    """Create a client logged in as the default admin"""
    # Force-login without hitting rate limits
    with client.session_transaction() as sess:
        sess['_user_id'] = admin_user.id
        sess['_fresh'] = True
    return client


@pytest.fixture
def make_user(user_repo, auth_service):
    """Factory creating users with named permissions"""
    from app.permissions import registry

    def _make_user(email, permissions=(), password='secret123', fullname='Test User'):
        return user_repo.create(
            fullname=fullname,
            email=email,
            password_hash=auth_service.hash_password(password),
            permissions=registry.mask_for(permissions),
        )

    return _make_user


@pytest.fixture
def editor_key(make_user, auth_service):
    """API key token for a user holding EditPosts"""
    make_user('editor@example.com', permissions=('EditPosts',))
    _, token = auth_service.issue_api_key('editor@example.com')
    return token


@pytest.fixture
def reader_key(make_user, auth_service):
    """API key token for a user without any permission bits"""
    make_user('reader@example.com')
    _, token = auth_service.issue_api_key('reader@example.com')
    return token
