"""Add tagline and social links to users

Revision ID: 0002_user_social_links
Revises: 0001_initial_schema
Create Date: 2025-11-03 18:20:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002_user_social_links'
down_revision: Union[str, None] = '0001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SOCIAL_COLUMNS = [
    ('tagline', 200),
    ('instagram', 100),
    ('twitter', 100),
    ('linkedin', 100),
    ('github', 100),
    ('youtube', 100),
    ('tiktok', 100),
    ('website', 255),
]


def upgrade() -> None:
    with op.batch_alter_table('users') as batch_op:
        for name, length in SOCIAL_COLUMNS:
            batch_op.add_column(sa.Column(name, sa.String(length=length), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table('users') as batch_op:
        for name, _ in reversed(SOCIAL_COLUMNS):
            batch_op.drop_column(name)
