"""add canceled bookings archive

Revision ID: 6c4d5e7f8a9b
Revises: 5b3c4d6e7f8a
Create Date: 2025-10-02 11:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '6c4d5e7f8a9b'
down_revision = '5b3c4d6e7f8a'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'canceled_bookings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('slot_id', sa.Integer(), nullable=True),
        sa.Column('slot_date', sa.Date(), nullable=False),
        sa.Column('slot_time', sa.Time(), nullable=False),
        sa.Column('slot_duration', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=160), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=40), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('postal_code', sa.String(length=20), nullable=False),
        sa.Column('city', sa.String(length=120), nullable=False),
        sa.Column('unit_count', sa.Integer(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('booking_created_at', sa.DateTime(), nullable=True),
        sa.Column('reason', sa.String(length=500), nullable=False),
        sa.Column('canceled_by', sa.String(length=80), nullable=False),
        sa.Column('canceled_by_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('canceled_bookings', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_canceled_bookings_booking_id'), ['booking_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_canceled_bookings_slot_date'), ['slot_date'], unique=False)


def downgrade():
    with op.batch_alter_table('canceled_bookings', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_canceled_bookings_slot_date'))
        batch_op.drop_index(batch_op.f('ix_canceled_bookings_booking_id'))

    op.drop_table('canceled_bookings')
