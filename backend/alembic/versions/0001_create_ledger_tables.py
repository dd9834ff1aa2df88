"""create ledger tables

Revision ID: 0001_create_ledger_tables
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_ledger_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'chart_of_accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('account_code', sa.String(length=20), nullable=False),
        sa.Column('account_name', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('account_type', sa.String(length=50), nullable=False),
        sa.Column('sub_type', sa.String(length=50), nullable=True),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('chart_of_accounts.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_chart_of_accounts_id', 'chart_of_accounts', ['id'])
    op.create_index('ix_chart_of_accounts_account_code', 'chart_of_accounts', ['account_code'], unique=True)
    op.create_index('ix_chart_of_accounts_parent_id', 'chart_of_accounts', ['parent_id'])

    op.create_table(
        'parties',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('party_type', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('zip_code', sa.String(), nullable=True),
        sa.Column('country', sa.String(), nullable=True),
        sa.Column('tax_id', sa.String(), nullable=True),
        sa.Column('payment_terms', sa.String(), nullable=True),
        sa.Column('credit_limit', sa.Numeric(15, 2), nullable=True),
        sa.Column('vendor_number', sa.String(), nullable=True),
        sa.Column('employee_id', sa.String(), nullable=True),
        sa.Column('department', sa.String(), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint('party_type', 'code', name='unique_party_code_per_type'),
    )
    op.create_index('ix_parties_id', 'parties', ['id'])
    op.create_index('ix_parties_party_type', 'parties', ['party_type'])

    op.create_table(
        'general_journals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('reference_id', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_general_journals_id', 'general_journals', ['id'])
    op.create_index('ix_general_journals_date', 'general_journals', ['date'])

    op.create_table(
        'journal_lines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('journal_id', sa.Integer(), sa.ForeignKey('general_journals.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'account_code',
            sa.String(length=20),
            sa.ForeignKey('chart_of_accounts.account_code', onupdate='CASCADE'),
            nullable=False,
        ),
        sa.Column('debit', sa.Numeric(18, 2), sa.CheckConstraint('debit >= 0'), nullable=False, server_default='0'),
        sa.Column('credit', sa.Numeric(18, 2), sa.CheckConstraint('credit >= 0'), nullable=False, server_default='0'),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('party_id', sa.Integer(), sa.ForeignKey('parties.id'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_journal_lines_id', 'journal_lines', ['id'])
    op.create_index('ix_journal_lines_journal_id', 'journal_lines', ['journal_id'])
    op.create_index('ix_journal_lines_account_code', 'journal_lines', ['account_code'])
    op.create_index('ix_journal_lines_party_id', 'journal_lines', ['party_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('journal_lines')
    op.drop_table('general_journals')
    op.drop_table('parties')
    op.drop_table('chart_of_accounts')
