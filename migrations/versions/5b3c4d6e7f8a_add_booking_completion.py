"""add booking completion

Revision ID: 5b3c4d6e7f8a
Revises: 4a2b3c5d6e7f
Create Date: 2025-10-02 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b3c4d6e7f8a'
down_revision = '4a2b3c5d6e7f'
branch_labels = None
depends_on = None


def upgrade():
    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.add_column(sa.Column('completed_by', sa.String(length=80), nullable=True))
        batch_op.add_column(sa.Column('completed_at', sa.DateTime(), nullable=True))


def downgrade():
    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.drop_column('completed_at')
        batch_op.drop_column('completed_by')
