"""Initial schema: users, posts and api_keys

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
        sa.Column('deleted_at', sa.DateTime, nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('fullname', sa.Text, nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('password', sa.Text, nullable=False),
        sa.Column('permissions', sa.BigInteger, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index(
        'idx_users_email', 'users', ['email'], unique=True,
        sqlite_where=sa.text('deleted_at IS NULL'),
    )
    op.create_index('idx_users_deleted_at', 'users', ['deleted_at'])

    op.create_table(
        'posts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('type', sa.String(100), nullable=True),
        sa.Column('body', sa.Text, nullable=True),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('author_id', sa.String(36), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_posts_title', 'posts', ['title'])
    op.create_index('idx_posts_author_id', 'posts', ['author_id'])
    op.create_index('idx_posts_deleted_at', 'posts', ['deleted_at'])

    op.create_table(
        'api_keys',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('key', sa.String(64), nullable=True, unique=True),
        sa.Column('owner_email', sa.String(100), nullable=True),
        sa.Column('expires_at', sa.BigInteger, nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_api_keys_owner_email', 'api_keys', ['owner_email'])
    op.create_index('idx_api_keys_expires_at', 'api_keys', ['expires_at'])
    op.create_index('idx_api_keys_deleted_at', 'api_keys', ['deleted_at'])


def downgrade() -> None:
    op.drop_table('api_keys')
    op.drop_table('posts')
    op.drop_table('users')
