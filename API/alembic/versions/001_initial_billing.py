"""Initial billing setup - subscriber ledger and payment journal

Revision ID: 001_initial_billing
Revises: (none)
Create Date: 2026-03-01
"""
from alembic import op
import sqlalchemy as sa

revision = '001_initial_billing'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    from sqlalchemy import inspect
    bind = op.get_bind()
    inspector = inspect(bind)
    existing = inspector.get_table_names()

    if 'isp_customers' not in existing:
        op.create_table(
            'isp_customers',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('username', sa.String(100), nullable=False),
            sa.Column('full_name', sa.String(300), nullable=False, server_default=''),
            sa.Column('status', sa.String(30), nullable=True),
            sa.Column('status_raw', sa.String(100), nullable=True),
            sa.Column('package', sa.String(100), nullable=False, server_default=''),
            sa.Column('bandwidth', sa.String(20), nullable=False, server_default=''),
            sa.Column('expiry_date', sa.Date(), nullable=True),
            sa.Column('area', sa.String(200), nullable=False, server_default=''),
            sa.Column('address', sa.String(500), nullable=False, server_default=''),
            sa.Column('mobile_number', sa.String(50), nullable=False, server_default=''),
            sa.Column('custom_price', sa.Integer(), nullable=True),
            sa.Column('pending_balance', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_isp_customers_username', 'isp_customers', ['username'], unique=True)
        op.create_index('ix_isp_customers_status', 'isp_customers', ['status'])

    if 'payments' not in existing:
        op.create_table(
            'payments',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('customer_id', sa.Integer(), sa.ForeignKey('isp_customers.id', ondelete='RESTRICT'), nullable=False),
            sa.Column('amount_paid', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('payment_date', sa.Date(), nullable=False),
            sa.Column('month', sa.Integer(), nullable=False),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.UniqueConstraint('customer_id', 'month', 'year', name='uq_payments_customer_period'),
            sa.CheckConstraint('month >= 1 AND month <= 12', name='ck_payments_month_range'),
        )
        op.create_index('ix_payments_customer_id', 'payments', ['customer_id'])
        op.create_index('ix_payments_period', 'payments', ['year', 'month'])
        op.create_index('ix_payments_payment_date', 'payments', ['payment_date'])


def downgrade() -> None:
    op.drop_table('payments')
    op.drop_table('isp_customers')
