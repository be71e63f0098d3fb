"""add rate limit windows

Revision ID: 8e6f7a9b0c1d
Revises: 7d5e6f8a9b0c
Create Date: 2025-11-03 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8e6f7a9b0c1d'
down_revision = '7d5e6f8a9b0c'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'rate_limit_windows',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('bucket', sa.String(length=40), nullable=False),
        sa.Column('ip', sa.String(length=64), nullable=False),
        sa.Column('window_start', sa.DateTime(), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('bucket', 'ip', name='uq_rate_limit_bucket_ip')
    )
    with op.batch_alter_table('rate_limit_windows', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_rate_limit_windows_ip'), ['ip'], unique=False)


def downgrade():
    with op.batch_alter_table('rate_limit_windows', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_rate_limit_windows_ip'))

    op.drop_table('rate_limit_windows')
