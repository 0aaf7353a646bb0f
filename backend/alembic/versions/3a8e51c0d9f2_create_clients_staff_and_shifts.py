"""create clients, staff members and shifts

Revision ID: 3a8e51c0d9f2
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '3a8e51c0d9f2'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


STATUS_TIMESTAMP_COLUMNS = (
    'published_at',
    'assigned_at',
    'confirmed_at',
    'declined_at',
    'in_progress_at',
    'completed_at',
    'missed_at',
    'canceled_at',
    'timesheet_submitted_at',
    'approved_at',
)


def upgrade() -> None:
    for table in ('client_types', 'id_types'):
        op.create_table(
            table,
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('name', name=f'uq_{table}_name'),
        )

    op.create_table(
        'clients',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('owner_email', sa.String(length=200), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('address', sa.String(length=200), nullable=True),
        sa.Column('suburb', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=50), nullable=True),
        sa.Column('postcode', sa.String(length=10), nullable=True),
        sa.Column('client_type_id', sa.String(length=36), nullable=True),
        sa.Column('client_type', sa.String(length=100), nullable=True),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('contact_person', sa.String(length=100), nullable=True),
        sa.Column('contact_phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=200), nullable=True),
        sa.Column('note', sa.String(length=1000), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['client_type_id'], ['client_types.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_email', 'name', name='uq_clients_owner_name'),
    )
    op.create_index(op.f('ix_clients_owner_email'), 'clients', ['owner_email'], unique=False)

    op.create_table(
        'staff_members',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('owner_email', sa.String(length=200), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('id_type_id', sa.String(length=36), nullable=True),
        sa.Column('id_number', sa.String(length=100), nullable=True),
        sa.Column('address', sa.String(length=200), nullable=True),
        sa.Column('suburb', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=50), nullable=True),
        sa.Column('postcode', sa.String(length=10), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['id_type_id'], ['id_types.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_email', 'email', name='uq_staff_members_owner_email'),
    )
    op.create_index(op.f('ix_staff_members_owner_email'), 'staff_members', ['owner_email'], unique=False)

    op.create_table(
        'shifts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('owner_email', sa.String(length=200), nullable=False),
        sa.Column('service_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('break_duration', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('service_type', sa.String(length=100), nullable=True),
        sa.Column('client_id', sa.String(length=36), nullable=True),
        sa.Column('client_name', sa.String(length=200), nullable=True),
        sa.Column('assigned_staff_member_id', sa.String(length=36), nullable=True),
        sa.Column('notified_staff_member_ids', sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Drafted'),
        sa.Column('note', sa.String(length=1000), nullable=True),
        *[sa.Column(name, sa.DateTime(timezone=True), nullable=True) for name in STATUS_TIMESTAMP_COLUMNS],
        sa.Column('archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_shifts_owner_email'), 'shifts', ['owner_email'], unique=False)
    op.create_index(op.f('ix_shifts_client_id'), 'shifts', ['client_id'], unique=False)
    op.create_index(
        op.f('ix_shifts_assigned_staff_member_id'), 'shifts', ['assigned_staff_member_id'], unique=False
    )
    op.create_index('ix_shifts_owner_service', 'shifts', ['owner_email', 'service_date', 'start_time'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_shifts_owner_service', table_name='shifts')
    op.drop_index(op.f('ix_shifts_assigned_staff_member_id'), table_name='shifts')
    op.drop_index(op.f('ix_shifts_client_id'), table_name='shifts')
    op.drop_index(op.f('ix_shifts_owner_email'), table_name='shifts')
    op.drop_table('shifts')

    op.drop_index(op.f('ix_staff_members_owner_email'), table_name='staff_members')
    op.drop_table('staff_members')

    op.drop_index(op.f('ix_clients_owner_email'), table_name='clients')
    op.drop_table('clients')

    op.drop_table('id_types')
    op.drop_table('client_types')
