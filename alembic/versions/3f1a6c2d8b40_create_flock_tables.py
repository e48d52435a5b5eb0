"""create sheep, breeding plan and manejo tables

Revision ID: 3f1a6c2d8b40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a6c2d8b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'sheep',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('sex', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('pregnant', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('dam_id', sa.Uuid(), nullable=True),
        sa.Column('group_id', sa.Uuid(), nullable=True),
        sa.Column('paddock_id', sa.Uuid(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tag'),
    )
    op.create_index(op.f('ix_sheep_status'), 'sheep', ['status'], unique=False)
    op.create_index(op.f('ix_sheep_group_id'), 'sheep', ['group_id'], unique=False)

    op.create_table(
        'breeding_plans',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('sync_date', sa.Date(), nullable=True),
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_breeding_plans_status'), 'breeding_plans', ['status'], unique=False)

    op.create_table(
        'breeding_plan_ewes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('plan_id', sa.Uuid(), nullable=False),
        sa.Column('ewe_id', sa.Uuid(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('heat_detected', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('heat_date', sa.Date(), nullable=True),
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('first_mating_date', sa.Date(), nullable=True),
        sa.Column('attempt_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('result_1', sa.String(length=16), nullable=False, server_default='PENDING'),
        sa.Column('result_2', sa.String(length=16), nullable=False, server_default='PENDING'),
        sa.Column('result_3', sa.String(length=16), nullable=False, server_default='PENDING'),
        sa.Column('finalized', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.ForeignKeyConstraint(['plan_id'], ['breeding_plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ewe_id'),
    )
    op.create_index(op.f('ix_breeding_plan_ewes_plan_id'), 'breeding_plan_ewes', ['plan_id'], unique=False)

    op.create_table(
        'manejos',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('planned_date', sa.Date(), nullable=False),
        sa.Column('planned_time', sa.String(length=5), nullable=False),
        sa.Column('kind', sa.String(length=16), nullable=False),
        sa.Column('rule', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('execution_date', sa.Date(), nullable=True),
        sa.Column('collaborator', sa.String(length=255), nullable=True),
        sa.Column('procedure', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('group_id', sa.Uuid(), nullable=True),
        sa.Column('sheep_ids', sa.JSON(), nullable=False),
        sa.Column('edited_by_manager', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('last_edited_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_manejos_planned_date'), 'manejos', ['planned_date'], unique=False)
    op.create_index(op.f('ix_manejos_status'), 'manejos', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_manejos_status'), table_name='manejos')
    op.drop_index(op.f('ix_manejos_planned_date'), table_name='manejos')
    op.drop_table('manejos')
    op.drop_index(op.f('ix_breeding_plan_ewes_plan_id'), table_name='breeding_plan_ewes')
    op.drop_table('breeding_plan_ewes')
    op.drop_index(op.f('ix_breeding_plans_status'), table_name='breeding_plans')
    op.drop_table('breeding_plans')
    op.drop_index(op.f('ix_sheep_group_id'), table_name='sheep')
    op.drop_index(op.f('ix_sheep_status'), table_name='sheep')
    op.drop_table('sheep')
