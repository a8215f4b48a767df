"""Add simulated ledger balance and allowance tables

Revision ID: c41d7a9e2b35
Revises: 8b2e6d4f0a17
Create Date: 2026-10-09

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c41d7a9e2b35'
down_revision: Union[str, None] = '8b2e6d4f0a17'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'ledger_balances',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ledger', sa.String(length=64), nullable=False),
        sa.Column('account', sa.String(length=64), nullable=False),
        sa.Column('balance', sa.String(length=78), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ledger', 'account', name='uq_ledger_balance_account'),
    )
    op.create_index('ix_ledger_balances_ledger', 'ledger_balances', ['ledger'])
    op.create_index('ix_ledger_balances_account', 'ledger_balances', ['account'])

    op.create_table(
        'ledger_allowances',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ledger', sa.String(length=64), nullable=False),
        sa.Column('owner', sa.String(length=64), nullable=False),
        sa.Column('spender', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.String(length=78), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ledger', 'owner', 'spender', name='uq_ledger_allowance'),
    )
    op.create_index('ix_ledger_allowances_ledger', 'ledger_allowances', ['ledger'])
    op.create_index('ix_ledger_allowances_owner', 'ledger_allowances', ['owner'])


def downgrade() -> None:
    op.drop_table('ledger_allowances')
    op.drop_table('ledger_balances')
