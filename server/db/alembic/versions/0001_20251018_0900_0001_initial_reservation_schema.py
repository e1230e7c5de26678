"""Initial reservation schema

Revision ID: 0001
Revises:
Create Date: 2025-10-18 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_date', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_date', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # Catalog
    op.create_table('cottages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('max_adults', sa.Integer(), nullable=False),
        sa.Column('max_children', sa.Integer(), nullable=False),
        sa.Column('base_price_per_night', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('max_adults >= 1', name='ck_cottage_max_adults_positive'),
        sa.CheckConstraint('max_children >= 0', name='ck_cottage_max_children_non_negative'),
        sa.CheckConstraint('base_price_per_night >= 0', name='ck_cottage_price_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_cottages_name'), 'cottages', ['name'], unique=False)
    op.create_index(op.f('ix_cottages_is_active'), 'cottages', ['is_active'], unique=False)

    op.create_table('packages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('includes_safari', sa.Boolean(), nullable=False),
        sa.Column('safari_count', sa.Integer(), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_package_price_non_negative'),
        sa.CheckConstraint('safari_count >= 0', name='ck_package_safari_count_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_packages_name'), 'packages', ['name'], unique=False)
    op.create_index(op.f('ix_packages_is_active'), 'packages', ['is_active'], unique=False)

    # Bookings
    op.create_table('bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('cottage_id', sa.Uuid(), nullable=False),
        sa.Column('package_id', sa.Uuid(), nullable=False),
        sa.Column('check_in_date', sa.Date(), nullable=False),
        sa.Column('check_out_date', sa.Date(), nullable=False),
        sa.Column('adults', sa.Integer(), nullable=False),
        sa.Column('children', sa.Integer(), nullable=False),
        sa.Column('total_cost', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('customer_info', sa.JSON(), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('payment_id', sa.String(length=255), nullable=True),
        sa.Column('special_requests', sa.Text(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('check_out_date > check_in_date', name='ck_booking_stay_positive'),
        sa.CheckConstraint('adults >= 1', name='ck_booking_adults_positive'),
        sa.CheckConstraint('children >= 0', name='ck_booking_children_non_negative'),
        sa.CheckConstraint('total_cost >= 0', name='ck_booking_total_cost_non_negative'),
        sa.ForeignKeyConstraint(['cottage_id'], ['cottages.id']),
        sa.ForeignKeyConstraint(['package_id'], ['packages.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bookings_cottage_id'), 'bookings', ['cottage_id'], unique=False)
    op.create_index(op.f('ix_bookings_package_id'), 'bookings', ['package_id'], unique=False)
    op.create_index(op.f('ix_bookings_check_in_date'), 'bookings', ['check_in_date'], unique=False)
    op.create_index(op.f('ix_bookings_check_out_date'), 'bookings', ['check_out_date'], unique=False)
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)

    # One row per cottage and day; the unique pair makes each claim atomic
    op.create_table('availability',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('cottage_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['cottage_id'], ['cottages.id']),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cottage_id', 'date', name='uq_availability_cottage_date')
    )
    op.create_index(op.f('ix_availability_booking_id'), 'availability', ['booking_id'], unique=False)
    op.create_index('ix_availability_cottage_available_date', 'availability', ['cottage_id', 'is_available', 'date'], unique=False)

    # Safaris
    op.create_table('safari_bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('safari_date', sa.Date(), nullable=False),
        sa.Column('safari_time', sa.String(length=50), nullable=False),
        sa.Column('safari_type', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('length(safari_time) > 0', name='ck_safari_time_not_empty'),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_safari_bookings_booking_id'), 'safari_bookings', ['booking_id'], unique=False)
    op.create_index(op.f('ix_safari_bookings_status'), 'safari_bookings', ['status'], unique=False)

    op.create_table('safari_inquiries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=50), nullable=True),
        sa.Column('preferred_date', sa.Date(), nullable=True),
        sa.Column('preferred_time', sa.String(length=50), nullable=True),
        sa.Column('num_adults', sa.Integer(), nullable=False),
        sa.Column('num_children', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('source', sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('num_adults >= 0', name='ck_inquiry_adults_non_negative'),
        sa.CheckConstraint('num_children >= 0', name='ck_inquiry_children_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_safari_inquiries_customer_email'), 'safari_inquiries', ['customer_email'], unique=False)
    op.create_index(op.f('ix_safari_inquiries_status'), 'safari_inquiries', ['status'], unique=False)

    # Idempotency
    op.create_table('idempotency_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('idempotency_key', sa.String(length=255), nullable=False),
        sa.Column('operation', sa.String(length=100), nullable=False),
        sa.Column('request_body_hash', sa.String(length=64), nullable=False),
        sa.Column('response_status_code', sa.Integer(), nullable=False),
        sa.Column('response_body', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_date', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('length(idempotency_key) > 0', name='ck_idempotency_key_not_empty'),
        sa.CheckConstraint('length(request_body_hash) = 64', name='ck_idempotency_hash_length'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('idempotency_key', 'operation', name='uq_idempotency_key_operation')
    )
    op.create_index(op.f('ix_idempotency_records_expires_at'), 'idempotency_records', ['expires_at'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table('idempotency_records')
    op.drop_table('safari_inquiries')
    op.drop_table('safari_bookings')
    op.drop_table('availability')
    op.drop_table('bookings')
    op.drop_table('packages')
    op.drop_table('cottages')
