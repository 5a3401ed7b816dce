"""booking schema

Revision ID: 5c1f0e2a9b47
Revises:
Create Date: 2026-10-19 09:12:44.301527

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1f0e2a9b47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Owners
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
    )
    op.create_index('ix_users_email', 'users', ['email'])

    # 2. Businesses (tenants)
    op.create_table(
        'businesses',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(220), nullable=False, unique=True),
        sa.Column('contact_info', sa.String(255), nullable=True),
        sa.Column('address', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_businesses_owner_id', 'businesses', ['owner_id'])
    op.create_index('ix_businesses_slug', 'businesses', ['slug'])

    # 3. Weekly working hours, one row per weekday (0=Sunday)
    op.create_table(
        'working_hours',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer, nullable=False),
        sa.Column('is_open', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('open_time', sa.Time, nullable=True),
        sa.Column('close_time', sa.Time, nullable=True),
        sa.UniqueConstraint('business_id', 'day_of_week', name='uq_working_hours_business_day')
    )

    # 4. Services
    op.create_table(
        'services',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('duration', sa.Integer, nullable=False),
        sa.Column('is_active', sa.Boolean, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('duration > 0', name='ck_services_duration_positive'),
        sa.CheckConstraint('price >= 0', name='ck_services_price_non_negative')
    )
    op.create_index('ix_services_business_id', 'services', ['business_id'])
    op.create_index('ix_services_is_active', 'services', ['is_active'])

    # 5. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id', ondelete='SET NULL'), nullable=True),
        sa.Column('customer_name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('date', sa.Date, nullable=False),
        sa.Column('time', sa.Time, nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('booking_code', sa.String(20), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_appointments_service_id', 'appointments', ['service_id'])
    op.create_index('ix_appointments_booking_code', 'appointments', ['booking_code'])
    op.create_index('idx_appointments_business_date', 'appointments', ['business_id', 'date'])

    # Two live bookings for the same business slot can never both commit
    op.create_index(
        'uq_appointments_active_slot',
        'appointments',
        ['business_id', 'date', 'time'],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'")
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_appointments_active_slot', table_name='appointments')
    op.drop_table('appointments')
    op.drop_table('services')
    op.drop_table('working_hours')
    op.drop_table('businesses')
    op.drop_table('users')
