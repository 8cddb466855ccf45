"""create training slots and overrides

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2025-01-02 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d2b7e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_groups_name', 'groups', ['name'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('display_name', sa.String(length=128), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False, server_default='swimmer'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'training_slots',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('day_of_week', sa.SmallInteger(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('location', sa.String(length=128), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_training_slots_day_start', 'training_slots', ['day_of_week', 'start_time'])

    op.create_table(
        'training_slot_assignments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('slot_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.Column('lane_count', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['slot_id'], ['training_slots.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id']),
        sa.ForeignKeyConstraint(['coach_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_training_slot_assignments_slot_id', 'training_slot_assignments', ['slot_id'])

    # slots are only soft-deleted, so no cascade from training_slots here
    op.create_table(
        'training_slot_overrides',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('slot_id', sa.Integer(), nullable=False),
        sa.Column('override_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('new_start_time', sa.Time(), nullable=True),
        sa.Column('new_end_time', sa.Time(), nullable=True),
        sa.Column('new_location', sa.String(length=128), nullable=True),
        sa.Column('reason', sa.String(length=512), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['slot_id'], ['training_slots.id']),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slot_id', 'override_date', name='uq_slot_override_date'),
        sa.CheckConstraint("status IN ('cancelled', 'modified')", name='ck_slot_override_status'),
    )
    op.create_index('ix_training_slot_overrides_date', 'training_slot_overrides', ['override_date'])


def downgrade() -> None:
    op.drop_index('ix_training_slot_overrides_date', table_name='training_slot_overrides')
    op.drop_table('training_slot_overrides')
    op.drop_index('ix_training_slot_assignments_slot_id', table_name='training_slot_assignments')
    op.drop_table('training_slot_assignments')
    op.drop_index('ix_training_slots_day_start', table_name='training_slots')
    op.drop_table('training_slots')
    op.drop_table('users')
    op.drop_index('ix_groups_name', table_name='groups')
    op.drop_table('groups')
