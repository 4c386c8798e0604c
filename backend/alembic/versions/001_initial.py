"""Initial migration - create accounts, activities and route points

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Matches the first released dataset layout: activities have no comment and
no owner yet.
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
    # Create accounts table
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(64), nullable=False),
        sa.Column('nickname', sa.String(100), nullable=False, server_default=''),
        sa.Column('gender', sa.String(20), nullable=False, server_default='-'),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_accounts_username', 'accounts', ['username'], unique=True)

    # Create activities table
    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('distance', sa.Float(), nullable=False),
        sa.Column('duration', sa.String(16), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_activities_date', 'activities', ['date'])

    # Create route_points table
    op.create_table(
        'route_points',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'activity_id', sa.Integer(),
            sa.ForeignKey('activities.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('segment_index', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_route_points_activity_id', 'route_points', ['activity_id'])


def downgrade() -> None:
    op.drop_index('ix_route_points_activity_id', 'route_points')
    op.drop_table('route_points')
    op.drop_index('ix_activities_date', 'activities')
    op.drop_table('activities')
    op.drop_index('ix_accounts_username', 'accounts')
    op.drop_table('accounts')
