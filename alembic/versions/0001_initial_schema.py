"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return sa.Column(
        'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def upgrade() -> None:
    """
    Create the ticketing schema.

    Tables: tenants, admin_users, events, ticket_types, attendees, tickets,
    transactions.
    """
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('domains', sa.JSON(), nullable=False),
        sa.Column('theme', sa.JSON(), nullable=False),
        sa.Column('settings', sa.JSON(), nullable=False),
        _timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_tenants_slug', 'tenants', ['slug'], unique=True)

    op.create_table(
        'admin_users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        _timestamps(),
        sa.UniqueConstraint('tenant_id', 'email', name='uq_admin_users_tenant_email'),
    )
    op.create_index('ix_admin_users_tenant_id', 'admin_users', ['tenant_id'])

    op.create_table(
        'events',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('subtitle', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('timezone', sa.String(length=50), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('speakers', sa.JSON(), nullable=False),
        sa.Column('agenda', sa.JSON(), nullable=False),
        _timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('tenant_id', 'slug', name='uq_events_tenant_slug'),
    )
    op.create_index('ix_events_tenant_id', 'events', ['tenant_id'])

    op.create_table(
        'ticket_types',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=True),
        sa.Column('quantity_sold', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_paid', sa.Boolean(), nullable=False),
        sa.Column('is_visible', sa.Boolean(), nullable=False),
        sa.Column('perks', sa.JSON(), nullable=False),
        sa.Column('valid_from', sa.DateTime(timezone=True), nullable=True),
        sa.Column('valid_until', sa.DateTime(timezone=True), nullable=True),
        _timestamps(),
    )
    op.create_index('ix_ticket_types_event_id', 'ticket_types', ['event_id'])

    op.create_table(
        'attendees',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('company', sa.String(length=255), nullable=True),
        _timestamps(),
    )
    op.create_index('ix_attendees_email', 'attendees', ['email'])

    op.create_table(
        'tickets',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('token', sa.String(length=255), nullable=False),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id'), nullable=False),
        sa.Column('ticket_type_id', sa.String(), sa.ForeignKey('ticket_types.id'), nullable=False),
        sa.Column('attendee_id', sa.String(), sa.ForeignKey('attendees.id'), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('qr_code', sa.Text(), nullable=True),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=False),
        _timestamps(),
    )
    op.create_index('ix_tickets_token', 'tickets', ['token'], unique=True)
    op.create_index('ix_tickets_event_id', 'tickets', ['event_id'])
    op.create_index('ix_tickets_ticket_type_id', 'tickets', ['ticket_type_id'])
    op.create_index('ix_tickets_attendee_id', 'tickets', ['attendee_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('ticket_id', sa.String(), sa.ForeignKey('tickets.id'), nullable=False),
        sa.Column('payment_intent_id', sa.String(length=255), nullable=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        _timestamps(),
    )
    op.create_index('ix_transactions_ticket_id', 'transactions', ['ticket_id'])
    op.create_index('ix_transactions_payment_intent_id', 'transactions', ['payment_intent_id'])


def downgrade() -> None:
    op.drop_table('transactions')
    op.drop_table('tickets')
    op.drop_table('attendees')
    op.drop_table('ticket_types')
    op.drop_table('events')
    op.drop_table('admin_users')
    op.drop_table('tenants')
