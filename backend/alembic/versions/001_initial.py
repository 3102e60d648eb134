"""Initial schema: users, strava_tokens, activities

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('provider_id', sa.String(32), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('avatar', sa.String(512), nullable=True),
        sa.Column('points', sa.Float(), nullable=False, server_default='0'),
        sa.Column('run_distance', sa.Float(), nullable=False, server_default='0'),
        sa.Column('ride_distance', sa.Float(), nullable=False, server_default='0'),
        sa.Column('streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_provider_id', 'users', ['provider_id'], unique=True)

    op.create_table(
        'strava_tokens',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'),
                  unique=True, nullable=False),
        sa.Column('access_token', sa.Text(), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'),
                  nullable=False),
        sa.Column('provider_id', sa.String(32), nullable=False),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('distance', sa.Float(), nullable=False, server_default='0'),
        sa.Column('pace', sa.Float(), nullable=False, server_default='0'),
        sa.Column('speed', sa.Float(), nullable=False, server_default='0'),
        sa.Column('high_fives', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_activities_user_id', 'activities', ['user_id'])
    op.create_index('ix_activities_date', 'activities', ['date'])
    op.create_index('ix_activities_user_date', 'activities', ['user_id', 'date'])


def downgrade() -> None:
    op.drop_index('ix_activities_user_date', 'activities')
    op.drop_index('ix_activities_date', 'activities')
    op.drop_index('ix_activities_user_id', 'activities')
    op.drop_table('activities')

    op.drop_table('strava_tokens')

    op.drop_index('ix_users_provider_id', 'users')
    op.drop_table('users')
