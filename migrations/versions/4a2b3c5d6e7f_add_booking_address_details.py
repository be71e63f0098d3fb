"""add postal code, city and unit count to bookings

Revision ID: 4a2b3c5d6e7f
Revises: 3f1a2b4c5d6e
Create Date: 2025-09-15 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4a2b3c5d6e7f'
down_revision = '3f1a2b4c5d6e'
branch_labels = None
depends_on = None


def upgrade():
    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.add_column(sa.Column('postal_code', sa.String(length=20), nullable=False, server_default=''))
        batch_op.add_column(sa.Column('city', sa.String(length=120), nullable=False, server_default=''))
        batch_op.add_column(sa.Column('unit_count', sa.Integer(), nullable=True))


def downgrade():
    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.drop_column('unit_count')
        batch_op.drop_column('city')
        batch_op.drop_column('postal_code')
