"""Tests for API auth endpoints"""

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'admin'


def test_api_login_success(client):
    response = client.post('/api/login', data={
        'email': ADMIN_EMAIL,
        'password': ADMIN_PASSWORD,
    })
    assert response.status_code == 200
    data = response.get_json()
    assert data['success'] is True
    assert data['user']['Email'] == ADMIN_EMAIL
    assert 'Password' not in data['user']


def test_api_login_accepts_json(client):
    response = client.post('/api/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 200


def test_api_login_invalid_credentials(client):
    response = client.post('/api/login', data={'email': ADMIN_EMAIL, 'password': 'wrongpassword'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid email or password'


def test_api_login_requires_both_fields(client):
    response = client.post('/api/login', data={'email': '', 'password': ''})
    assert response.status_code == 400


def test_deleted_user_cannot_log_in(client, make_user, user_repo):
    user = make_user('gone@example.com')
    user_repo.soft_delete(user.id)
    response = client.post('/api/login', json={'email': 'gone@example.com', 'password': 'secret123'})
    assert response.status_code == 401


def test_whoami_requires_auth(client):
    response = client.get('/api/whoami')
    assert response.status_code == 401


def test_whoami_after_login(client):
    client.post('/api/login', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    response = client.get('/api/whoami')
    assert response.status_code == 200
    data = response.get_json()
    assert data['user']['Email'] == ADMIN_EMAIL
    assert 'Admin' in data['permissions']
    assert data['via_api_key'] is False


def test_whoami_with_api_key(client, editor_key):
    response = client.get('/api/whoami', headers={'X-API-Key': editor_key})
    assert response.status_code == 200
    data = response.get_json()
    assert data['user']['Email'] == 'editor@example.com'
    assert data['permissions'] == ['EditPosts']
    assert data['via_api_key'] is True


def test_api_logout(client):
    client.post('/api/login', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    response = client.post('/api/logout')
    assert response.status_code == 200
    assert response.get_json()['success'] is True
    assert client.get('/api/whoami').status_code == 401


def test_change_password(authenticated_client, client):
    response = authenticated_client.post('/api/user/change-password', json={
        'current_password': ADMIN_PASSWORD,
        'new_password': 'new-secret',
        'confirm_password': 'new-secret',
    })
    assert response.status_code == 200

    authenticated_client.post('/api/logout')
    response = client.post('/api/login', data={'email': ADMIN_EMAIL, 'password': 'new-secret'})
    assert response.status_code == 200


def test_change_password_validation(authenticated_client):
    response = authenticated_client.post('/api/user/change-password', json={
        'current_password': ADMIN_PASSWORD,
        'new_password': 'abc',
        'confirm_password': 'abc',
    })
    assert response.status_code == 400

    response = authenticated_client.post('/api/user/change-password', json={
        'current_password': 'wrong',
        'new_password': 'new-secret',
        'confirm_password': 'new-secret',
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Current password is incorrect'


def test_change_password_requires_session(client):
    response = client.post('/api/user/change-password', json={})
    assert response.status_code == 401


def test_csrf_token_endpoint(client):
    response = client.get('/api/csrf-token')
    assert response.status_code == 200
    assert response.get_json()['csrf_token']
