"""Create work item, dependency and milestone tables

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f0a9d2b7e'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('work_items',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='not_started'),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('duration_days', sa.Integer(), nullable=True),
        sa.Column('start_after', sa.Date(), nullable=True),
        sa.Column('start_before', sa.Date(), nullable=True),
        sa.Column('actual_start_date', sa.Date(), nullable=True),
        sa.Column('actual_end_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint("status IN ('not_started', 'in_progress', 'completed', 'blocked')",
                           name='ck_work_items_status'),
        sa.CheckConstraint('duration_days IS NULL OR duration_days >= 0', name='ck_work_items_duration'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_work_items_status', 'work_items', ['status'], unique=False)

    op.create_table('work_item_dependencies',
        sa.Column('predecessor_id', sa.String(length=36), nullable=False),
        sa.Column('successor_id', sa.String(length=36), nullable=False),
        sa.Column('dependency_type', sa.String(length=20), nullable=False, server_default='finish_to_start'),
        sa.Column('lead_lag_days', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint('predecessor_id != successor_id', name='ck_dependency_not_self'),
        sa.CheckConstraint("dependency_type IN ('finish_to_start', 'start_to_start', "
                           "'finish_to_finish', 'start_to_finish')",
                           name='ck_dependency_type'),
        sa.ForeignKeyConstraint(['predecessor_id'], ['work_items.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['successor_id'], ['work_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('predecessor_id', 'successor_id')
    )
    op.create_index('idx_dependencies_successor', 'work_item_dependencies', ['successor_id'], unique=False)

    op.create_table('milestones',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('target_date', sa.Date(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('milestone_work_items',
        sa.Column('milestone_id', sa.Integer(), nullable=False),
        sa.Column('work_item_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['milestone_id'], ['milestones.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['work_item_id'], ['work_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('milestone_id', 'work_item_id')
    )

    op.create_table('work_item_milestone_deps',
        sa.Column('work_item_id', sa.String(length=36), nullable=False),
        sa.Column('milestone_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['milestone_id'], ['milestones.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['work_item_id'], ['work_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('work_item_id', 'milestone_id')
    )


def downgrade():
    op.drop_table('work_item_milestone_deps')
    op.drop_table('milestone_work_items')
    op.drop_table('milestones')
    op.drop_index('idx_dependencies_successor', table_name='work_item_dependencies')
    op.drop_table('work_item_dependencies')
    op.drop_index('idx_work_items_status', table_name='work_items')
    op.drop_table('work_items')
