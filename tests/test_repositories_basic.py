"""Repository coverage tests for the persistence layer."""

import sqlite3

import pytest

from app.db import get_db
from app.models import ApiKey, Post, User
from app.repositories import ApiKeyRepository, PostRepository, UserRepository


def test_default_admin_is_seeded(app):
    repo = UserRepository(get_db)
    users = repo.list_all()
    assert len(users) == 1
    admin = users[0]
    assert isinstance(admin, User)
    assert admin.email == 'admin@example.com'
    assert admin.permissions & 1
    assert admin.password.startswith('$2')


def test_user_repository_crud(app):
    repo = UserRepository(get_db)
    user = repo.create('Jane Doe', 'jane@example.com', 'hash', permissions=3)

    loaded = repo.get_by_id(user.id)
    assert loaded == repo.get_by_email('JANE@example.com')
    assert loaded.fullname == 'Jane Doe'
    assert loaded.permissions == 3
    assert loaded.created_at is not None
    assert loaded.deleted_at is None

    assert repo.update(user.id, {'fullname': 'Jane Roe', 'permissions': 5}) is True
    assert repo.get_by_id(user.id).fullname == 'Jane Roe'
    assert repo.update_password(user.id, 'new-hash') is True
    assert repo.get_by_id(user.id).password == 'new-hash'

    with pytest.raises(ValueError):
        repo.update(user.id, {'password': 'sneaky'})

    assert repo.count() == 2
    assert repo.soft_delete(user.id) is True
    assert repo.soft_delete(user.id) is False
    assert repo.get_by_id(user.id) is None
    assert repo.get_by_id(user.id, include_deleted=True).is_deleted is True
    assert repo.count() == 1
    assert repo.count(include_deleted=True) == 2
    assert repo.update(user.id, {'fullname': 'Ghost'}) is False

    assert repo.restore(user.id) is True
    assert repo.get_by_id(user.id).deleted_at is None


def test_live_emails_are_unique(app):
    repo = UserRepository(get_db)
    first = repo.create('Jane', 'jane@example.com', 'hash')
    with pytest.raises(sqlite3.IntegrityError):
        repo.create('Other Jane', 'jane@example.com', 'hash')

    repo.soft_delete(first.id)
    second = repo.create('Other Jane', 'jane@example.com', 'hash')
    assert repo.get_by_email('jane@example.com').id == second.id


def test_post_repository_crud(app):
    repo = PostRepository(get_db)
    post = repo.create('Test Post', body='This is a test post', post_type='blog', author_id='u1')
    assert isinstance(post, Post)

    loaded = repo.get_by_id(post.id)
    assert loaded == post
    assert repo.find_by_title('Test Post').id == post.id
    assert repo.find_by_title('Missing') is None

    assert repo.update(post.id, {'body': '', 'type': None}) is True
    updated = repo.get_by_id(post.id)
    assert updated.body == ''
    assert updated.type is None
    assert updated.updated_at >= post.updated_at

    assert repo.soft_delete(post.id) is True
    assert repo.get_by_id(post.id) is None
    assert repo.find_by_title('Test Post') is None
    assert repo.restore(post.id) is True
    assert repo.get_by_id(post.id) is not None


def test_post_repository_filters(app):
    repo = PostRepository(get_db)
    repo.create('One', post_type='blog', author_id='a')
    repo.create('Two', post_type='news', author_id='a')
    third = repo.create('Three', post_type='blog', author_id='b')
    repo.soft_delete(third.id)

    assert {p.title for p in repo.list_all()} == {'One', 'Two'}
    assert [p.title for p in repo.list_all(post_type='blog')] == ['One']
    assert {p.title for p in repo.list_all(author_id='a')} == {'One', 'Two'}
    assert len(repo.list_all(include_deleted=True)) == 3
    assert repo.count() == 2


def test_api_key_repository(app):
    repo = ApiKeyRepository(get_db)
    api_key = repo.create('f' * 64, 'admin@example.com', expires_at=1893456000)
    assert isinstance(api_key, ApiKey)

    assert repo.get_by_key('f' * 64) == api_key
    assert repo.get_by_id(api_key.id).owner_email == 'admin@example.com'
    assert [k.id for k in repo.list_for_owner('ADMIN@example.com')] == [api_key.id]
    assert len(repo.list_all()) == 1

    assert repo.soft_delete(api_key.id) is True
    assert repo.get_by_key('f' * 64) is None
    assert repo.list_all() == []
    assert repo.list_all(include_deleted=True)[0].is_deleted is True
