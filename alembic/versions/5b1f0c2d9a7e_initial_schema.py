"""Initial schema: users, tags, content, content_tags, share_links

Revision ID: 5b1f0c2d9a7e
Revises:
Create Date: 2025-09-20 10:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2d9a7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('google_id', sa.String(length=255), nullable=True),
        sa.Column('auth_provider', sa.String(length=20), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('profile_picture', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_email_verified', sa.Boolean(), nullable=False),
        sa.Column('reset_password_token_hash', sa.String(length=64), nullable=True),
        sa.Column('reset_password_expires', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("auth_provider IN ('local', 'google')", name='ck_users_auth_provider'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('google_id'),
    )
    op.create_index('idx_users_active', 'users', ['is_active'])

    op.create_table(
        'tags',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(length=50), nullable=False),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        sa.Column('is_global', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('(owner_id IS NULL) = is_global', name='ck_tags_global_has_no_owner'),
        sa.CheckConstraint('length(title) <= 50', name='ck_tags_title_len'),
    )
    op.create_index('idx_tags_owner_id', 'tags', ['owner_id'])
    op.create_index(
        'uq_tags_owner_title', 'tags', ['owner_id', sa.text('lower(title)')], unique=True,
        postgresql_where=sa.text('owner_id IS NOT NULL'),
    )
    op.create_index(
        'uq_tags_global_title', 'tags', [sa.text('lower(title)')], unique=True,
        postgresql_where=sa.text('owner_id IS NULL'),
    )

    op.create_table(
        'content',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('link', sa.String(length=2048), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_shared', sa.Boolean(), nullable=False),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("type IN ('image', 'video', 'article', 'audio')", name='ck_content_type'),
        sa.CheckConstraint('length(title) <= 200', name='ck_content_title_len'),
    )
    op.create_index('idx_content_owner_id', 'content', ['owner_id'])
    op.create_index('idx_content_owner_shared', 'content', ['owner_id', 'is_shared'])
    op.create_index('idx_content_owner_created', 'content', ['owner_id', 'created_at'])

    op.create_table(
        'content_tags',
        sa.Column('content_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('content.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('tag_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_index('idx_content_tags_tag_id', 'content_tags', ['tag_id'])

    op.create_table(
        'share_links',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_share_links_token', 'share_links', ['token'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_share_links_token', table_name='share_links')
    op.drop_table('share_links')
    op.drop_index('idx_content_tags_tag_id', table_name='content_tags')
    op.drop_table('content_tags')
    op.drop_index('idx_content_owner_created', table_name='content')
    op.drop_index('idx_content_owner_shared', table_name='content')
    op.drop_index('idx_content_owner_id', table_name='content')
    op.drop_table('content')
    op.drop_index('uq_tags_global_title', table_name='tags')
    op.drop_index('uq_tags_owner_title', table_name='tags')
    op.drop_index('idx_tags_owner_id', table_name='tags')
    op.drop_table('tags')
    op.drop_index('idx_users_active', table_name='users')
    op.drop_table('users')
