"""Add account and payment tables

Revision ID: 20261019_1200_accounts_payments
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_1200_accounts_payments'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ============================================================
    # Account Table
    # ============================================================
    op.create_table('account',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('identifier', sa.String(length=64), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('balance', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('balance >= 0', name='ck_account_balance_non_negative')
    )
    op.create_index(op.f('ix_account_id'), 'account', ['id'], unique=False)
    op.create_index(op.f('ix_account_identifier'), 'account', ['identifier'], unique=True)

    # ============================================================
    # Payment Table (append-only)
    # ============================================================
    op.create_table('payment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('from_id', sa.String(length=64), nullable=False),
        sa.Column('to_id', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['from_id'], ['account.identifier'], ),
        sa.ForeignKeyConstraint(['to_id'], ['account.identifier'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='ck_payment_amount_positive')
    )
    op.create_index(op.f('ix_payment_id'), 'payment', ['id'], unique=False)
    op.create_index(op.f('ix_payment_from_id'), 'payment', ['from_id'], unique=False)
    op.create_index(op.f('ix_payment_to_id'), 'payment', ['to_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_payment_to_id'), table_name='payment')
    op.drop_index(op.f('ix_payment_from_id'), table_name='payment')
    op.drop_index(op.f('ix_payment_id'), table_name='payment')
    op.drop_table('payment')
    op.drop_index(op.f('ix_account_identifier'), table_name='account')
    op.drop_index(op.f('ix_account_id'), table_name='account')
    op.drop_table('account')
