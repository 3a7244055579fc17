"""Tests for post endpoints"""
import json


def create_post(client, key, **payload):
    body = {'Title': 'Test Post', 'Body': 'This is a test post', 'Type': 'blog'}
    body.update(payload)
    return client.post('/posts', headers={'X-API-Key': key}, json=body)


class TestReadPosts:
    """Public read endpoints"""

    def test_list_posts_is_public(self, client):
        response = client.get('/posts')
        assert response.status_code == 200
        assert json.loads(response.data) == []

    def test_get_missing_post(self, client):
        response = client.get('/posts/does-not-exist')
        assert response.status_code == 404

    def test_list_filters_by_type(self, client, editor_key):
        create_post(client, editor_key, Title='A', Type='blog')
        create_post(client, editor_key, Title='B', Type='news')

        titles = [p['Title'] for p in client.get('/posts?type=news').get_json()]
        assert titles == ['B']


class TestWritePosts:
    """Authenticated write endpoints"""

    def test_create_post_with_api_key(self, client, editor_key, user_repo):
        response = create_post(client, editor_key)
        assert response.status_code == 201
        data = response.get_json()
        assert data['Title'] == 'Test Post'
        assert data['Type'] == 'blog'
        assert 'DeletedAt' not in data

        editor = user_repo.get_by_email('editor@example.com')
        assert data['AuthorID'] == editor.id

        fetched = client.get(f"/posts/{data['ID']}").get_json()
        assert fetched == data

    def test_create_post_keeps_explicit_author(self, client, editor_key):
        data = create_post(client, editor_key, AuthorID='u1').get_json()
        assert data['AuthorID'] == 'u1'

    def test_create_post_with_only_title(self, client, editor_key):
        response = client.post('/posts', headers={'X-API-Key': editor_key}, json={'Title': 'Bare'})
        assert response.status_code == 201
        data = response.get_json()
        assert 'Body' not in data
        assert 'Type' not in data

    def test_create_post_requires_title(self, client, editor_key):
        response = client.post('/posts', headers={'X-API-Key': editor_key}, json={'Body': 'x'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing required field: Title'

    def test_create_post_rejects_bad_types(self, client, editor_key):
        response = create_post(client, editor_key, Body=42)
        assert response.status_code == 400
        response = create_post(client, editor_key, Title='x' * 300)
        assert response.status_code == 400

    def test_create_post_rejects_long_author_id(self, client, editor_key):
        response = create_post(client, editor_key, AuthorID='a' * 50)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'AuthorID is too long'
        assert client.get('/posts').get_json() == []

    def test_create_post_requires_auth(self, client):
        response = client.post('/posts', json={'Title': 'Nope'})
        assert response.status_code == 401

    def test_create_post_requires_edit_permission(self, client, reader_key):
        response = create_post(client, reader_key)
        assert response.status_code == 403

    def test_invalid_api_key_rejected(self, client):
        response = create_post(client, 'chukfi_not-a-real-key')
        assert response.status_code == 401
        response = create_post(client, 'wrongprefix')
        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid API key format'

    def test_admin_session_can_create(self, authenticated_client):
        response = authenticated_client.post('/posts', json={'Title': 'From admin'})
        assert response.status_code == 201

    def test_update_distinguishes_null_from_missing(self, client, editor_key):
        post = create_post(client, editor_key).get_json()

        response = client.put(
            f"/posts/{post['ID']}",
            headers={'X-API-Key': editor_key},
            json={'Body': '', 'Type': None},
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data['Body'] == ''
        assert 'Type' not in data
        assert data['Title'] == 'Test Post'

    def test_update_requires_fields(self, client, editor_key):
        post = create_post(client, editor_key).get_json()
        response = client.put(f"/posts/{post['ID']}", headers={'X-API-Key': editor_key}, json={'Other': 1})
        assert response.status_code == 400

    def test_update_missing_post(self, client, editor_key):
        response = client.put('/posts/missing', headers={'X-API-Key': editor_key}, json={'Title': 'x'})
        assert response.status_code == 404

    def test_soft_delete_and_restore(self, client, editor_key, authenticated_client):
        post = create_post(client, editor_key).get_json()
        headers = {'X-API-Key': editor_key}

        assert client.delete(f"/posts/{post['ID']}", headers=headers).status_code == 200
        assert client.get(f"/posts/{post['ID']}").status_code == 404
        assert client.get('/posts').get_json() == []
        assert client.delete(f"/posts/{post['ID']}", headers=headers).status_code == 404

        trash = authenticated_client.get('/posts/trash').get_json()
        assert [p['ID'] for p in trash] == [post['ID']]
        assert 'DeletedAt' in trash[0]

        response = client.post(f"/posts/{post['ID']}/restore", headers=headers)
        assert response.status_code == 200
        assert 'DeletedAt' not in response.get_json()
        assert client.get(f"/posts/{post['ID']}").status_code == 200

    def test_trash_requires_view_permission(self, client, editor_key):
        response = client.get('/posts/trash', headers={'X-API-Key': editor_key})
        assert response.status_code == 403
