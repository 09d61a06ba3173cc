"""Initial schema: users, prompts, likes, comments, followers, interactions, recommendation cache

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-10-20 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('email', sa.String(length=255), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('handle', sa.String(length=30), nullable=False),
        sa.Column('profile_photo', sa.String(), nullable=True),
        sa.Column('password_hash', sa.LargeBinary(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_handle', 'users', ['handle'], unique=True)

    op.create_table(
        'prompts',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('author_email', sa.String(length=255),
                  sa.ForeignKey('users.email', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False, server_default='General'),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('image_key', sa.Text(), nullable=True),
        sa.Column('like_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('comment_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_prompts_author_email', 'prompts', ['author_email'])
    op.create_index('ix_prompts_created_at', 'prompts', ['created_at'])

    op.create_table(
        'prompt_likes',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('prompt_id', sa.BigInteger(),
                  sa.ForeignKey('prompts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_email', sa.String(length=255),
                  sa.ForeignKey('users.email', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('prompt_id', 'user_email', name='uq_prompt_like'),
    )
    op.create_index('ix_prompt_likes_user_email', 'prompt_likes', ['user_email'])

    op.create_table(
        'prompt_comments',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('prompt_id', sa.BigInteger(),
                  sa.ForeignKey('prompts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_email', sa.String(length=255),
                  sa.ForeignKey('users.email', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_prompt_comments_prompt_id', 'prompt_comments', ['prompt_id'])

    op.create_table(
        'followers',
        sa.Column('follower_email', sa.String(length=255),
                  sa.ForeignKey('users.email', ondelete='CASCADE'), primary_key=True),
        sa.Column('followee_email', sa.String(length=255),
                  sa.ForeignKey('users.email', ondelete='CASCADE'), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('follower_email <> followee_email', name='ck_followers_not_self'),
    )
    op.create_index('ix_followers_followee_email', 'followers', ['followee_email'])

    op.create_table(
        'user_interactions',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('user_email', sa.String(length=255),
                  sa.ForeignKey('users.email', ondelete='CASCADE'), nullable=False),
        sa.Column('prompt_id', sa.BigInteger(),
                  sa.ForeignKey('prompts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('interaction_type', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_email', 'prompt_id', 'interaction_type', name='uq_interaction'),
    )
    op.create_index('ix_user_interactions_user_email', 'user_interactions', ['user_email'])
    op.create_index('ix_user_interactions_prompt_id', 'user_interactions', ['prompt_id'])
    op.create_index('ix_user_interactions_interaction_type', 'user_interactions', ['interaction_type'])

    op.create_table(
        'recommendation_cache',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('user_email', sa.String(length=255),
                  sa.ForeignKey('users.email', ondelete='CASCADE'), nullable=False),
        sa.Column('prompt_id', sa.BigInteger(),
                  sa.ForeignKey('prompts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('score', sa.Numeric(5, 2), nullable=False),
        sa.Column('reason', sa.String(length=100), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_email', 'prompt_id', name='uq_recommendation'),
    )
    op.create_index('ix_recommendation_cache_user_email', 'recommendation_cache', ['user_email'])
    op.create_index('ix_recommendation_cache_score', 'recommendation_cache', ['score'])


def downgrade() -> None:
    op.drop_table('recommendation_cache')
    op.drop_table('user_interactions')
    op.drop_table('followers')
    op.drop_table('prompt_comments')
    op.drop_table('prompt_likes')
    op.drop_table('prompts')
    op.drop_table('users')
