"""Add comment and owner to activities, point sequence to route points

Revision ID: 002_activity_comment_account
Revises: 001_initial
Create Date: 2026-10-19

Adds:
- activities.comment (empty string for existing rows)
- activities.account_id (NULL for existing rows)
- route_points.sequence (0 for existing rows; id order is kept on read)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_activity_comment_account'
down_revision: Union[str, None] = '001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Batch mode so SQLite can add the foreign key
    with op.batch_alter_table('activities') as batch_op:
        batch_op.add_column(sa.Column('comment', sa.Text(), nullable=False, server_default=''))
        batch_op.add_column(sa.Column('account_id', sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            'fk_activities_account_id_accounts', 'accounts', ['account_id'], ['id']
        )
        batch_op.create_index('ix_activities_account_id', ['account_id'])

    op.add_column(
        'route_points',
        sa.Column('sequence', sa.Integer(), nullable=False, server_default='0')
    )


def downgrade() -> None:
    op.drop_column('route_points', 'sequence')

    with op.batch_alter_table('activities') as batch_op:
        batch_op.drop_index('ix_activities_account_id')
        batch_op.drop_constraint('fk_activities_account_id_accounts', type_='foreignkey')
        batch_op.drop_column('account_id')
        batch_op.drop_column('comment')
