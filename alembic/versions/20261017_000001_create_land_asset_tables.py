"""Create land asset tables

Revision ID: 20261017_000001
Revises: None
Create Date: 2026-10-17

Creates buyers, properties, subdivisions, payments, documents, receipts,
receipt e-mails, recall history and per-user settings.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SUBDIVISION_STATUSES = ('on_hold', 'available', 'mortgage', 'sold', 'paid_in_full', 'recalled')


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'buyers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_buyers_user_id', 'buyers', ['user_id'])
    op.create_index('ix_buyers_name', 'buyers', ['name'])

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('available', 'pending', 'sold', name='property_status'),
            nullable=False,
            server_default='available'
        ),
        sa.Column('sale_price', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('buyer_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['buyer_id'], ['buyers.id'], name='fk_properties_buyer_id', ondelete='SET NULL'),
    )
    op.create_index('ix_properties_user_id', 'properties', ['user_id'])

    op.create_table(
        'subdivisions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum(*SUBDIVISION_STATUSES, name='subdivision_status'),
            nullable=False,
            server_default='available'
        ),
        sa.Column('sale_price', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('buyer_id', sa.Integer(), nullable=True),
        sa.Column('lot_number', sa.String(length=100), nullable=True),
        sa.Column('surveyor_plan_number', sa.String(length=100), nullable=True),
        sa.Column('registration_number', sa.String(length=100), nullable=True),
        sa.Column('mutation_number', sa.String(length=100), nullable=True),
        sa.Column('acres', sa.Numeric(precision=12, scale=4), nullable=True),
        sa.Column('length', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('width', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('owner_first_name', sa.String(length=100), nullable=True),
        sa.Column('owner_middle_name', sa.String(length=100), nullable=True),
        sa.Column('owner_last_name', sa.String(length=100), nullable=True),
        sa.Column('title_nes_number', sa.String(length=100), nullable=True),
        sa.Column('submission_date', sa.Date(), nullable=True),
        sa.Column('hold_until_date', sa.Date(), nullable=True),
        sa.Column('hold_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column(
            'payment_type',
            sa.Enum('full', 'mortgage', 'installment', name='payment_type'),
            nullable=False,
            server_default='full'
        ),
        sa.Column('payment_plan_type', sa.Enum('full', 'mortgage', 'hold', name='payment_plan_type'), nullable=True),
        sa.Column('daily_interest_rate', sa.Numeric(precision=10, scale=6), nullable=True),
        sa.Column('interest_grace_period_days', sa.Integer(), nullable=True),
        sa.Column('last_payment_date', sa.Date(), nullable=True),
        sa.Column('total_interest_charged', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('recall_date', sa.Date(), nullable=True),
        sa.Column('recall_reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'], ['properties.id'], name='fk_subdivisions_property_id', ondelete='CASCADE'
        ),
        # NO ACTION: SQL Server rejects a second cascade path to buyers
        sa.ForeignKeyConstraint(['buyer_id'], ['buyers.id'], name='fk_subdivisions_buyer_id', ondelete='NO ACTION'),
    )
    op.create_index('ix_subdivisions_property_id', 'subdivisions', ['property_id'])
    op.create_index('ix_subdivisions_user_id', 'subdivisions', ['user_id'])
    op.create_index('ix_subdivisions_status', 'subdivisions', ['status'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('subdivision_id', sa.Integer(), nullable=True),
        sa.Column('buyer_id', sa.Integer(), nullable=True),
        sa.Column('amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('principal_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('interest_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('days_since_last_payment', sa.Integer(), nullable=True),
        sa.Column('interest_calculation_date', sa.Date(), nullable=True),
        sa.Column('interest_rate_used', sa.Numeric(precision=10, scale=6), nullable=True),
        sa.Column('grace_period_days', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_payments_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(
            ['subdivision_id'], ['subdivisions.id'], name='fk_payments_subdivision_id', ondelete='NO ACTION'
        ),
        sa.ForeignKeyConstraint(['buyer_id'], ['buyers.id'], name='fk_payments_buyer_id', ondelete='NO ACTION'),
    )
    op.create_index('ix_payments_user_id', 'payments', ['user_id'])
    op.create_index('ix_payments_property_id', 'payments', ['property_id'])
    op.create_index('ix_payments_subdivision_id', 'payments', ['subdivision_id'])
    op.create_index('ix_payments_payment_date', 'payments', ['payment_date'])

    op.create_table(
        'documents',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('subdivision_id', sa.Integer(), nullable=True),
        sa.Column('payment_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('file_path', sa.String(length=500), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('file_type', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_documents_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(
            ['subdivision_id'], ['subdivisions.id'], name='fk_documents_subdivision_id', ondelete='NO ACTION'
        ),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id'], name='fk_documents_payment_id', ondelete='NO ACTION'),
    )
    op.create_index('ix_documents_user_id', 'documents', ['user_id'])
    op.create_index('ix_documents_property_id', 'documents', ['property_id'])
    op.create_index('ix_documents_subdivision_id', 'documents', ['subdivision_id'])
    op.create_index('ix_documents_payment_id', 'documents', ['payment_id'])

    op.create_table(
        'receipts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('payment_id', sa.Integer(), nullable=False),
        sa.Column('receipt_number', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('payment_id', name='uq_receipts_payment_id'),
        sa.UniqueConstraint('receipt_number', name='uq_receipts_receipt_number'),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id'], name='fk_receipts_payment_id', ondelete='CASCADE'),
    )
    op.create_index('ix_receipts_user_id', 'receipts', ['user_id'])

    op.create_table(
        'receipt_emails',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('receipt_id', sa.Integer(), nullable=False),
        sa.Column('email_address', sa.String(length=255), nullable=False),
        sa.Column('sent_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['receipt_id'], ['receipts.id'], name='fk_receipt_emails_receipt_id', ondelete='CASCADE'
        ),
    )
    op.create_index('ix_receipt_emails_user_id', 'receipt_emails', ['user_id'])
    op.create_index('ix_receipt_emails_receipt_id', 'receipt_emails', ['receipt_id'])

    op.create_table(
        'subdivision_recall_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('subdivision_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('buyer_id', sa.Integer(), nullable=True),
        sa.Column('recall_reason', sa.Text(), nullable=False),
        sa.Column('sale_price', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('total_paid', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('hold_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('hold_until_date', sa.Date(), nullable=True),
        sa.Column('payment_plan_type', sa.String(length=20), nullable=True),
        sa.Column('buyer_name', sa.String(length=255), nullable=True),
        sa.Column('buyer_email', sa.String(length=255), nullable=True),
        sa.Column('buyer_phone', sa.String(length=50), nullable=True),
        sa.Column('recalled_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['subdivision_id'], ['subdivisions.id'], name='fk_recall_history_subdivision_id', ondelete='CASCADE'
        ),
    )
    op.create_index('ix_subdivision_recall_history_subdivision_id', 'subdivision_recall_history', ['subdivision_id'])
    op.create_index('ix_subdivision_recall_history_user_id', 'subdivision_recall_history', ['user_id'])

    op.create_table(
        'system_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('setting_key', sa.String(length=100), nullable=False),
        sa.Column('setting_value', sa.String(length=255), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'setting_key', name='uq_system_settings_user_key'),
    )
    op.create_index('ix_system_settings_user_id', 'system_settings', ['user_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table('system_settings')
    op.drop_table('subdivision_recall_history')
    op.drop_table('receipt_emails')
    op.drop_table('receipts')
    op.drop_table('documents')
    op.drop_table('payments')
    op.drop_table('subdivisions')
    op.drop_table('properties')
    op.drop_table('buyers')
