"""Add per-currency buy toggles to presale_rounds

Revision ID: 8b2e6d4f0a17
Revises: 3f9a1c2d7e4b
Create Date: 2026-10-06

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b2e6d4f0a17'
down_revision: Union[str, None] = '3f9a1c2d7e4b'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Existing rounds keep both payment paths open
    op.add_column('presale_rounds', sa.Column('enable_buy_with_native', sa.Boolean(), nullable=False, server_default=sa.true()))
    op.add_column('presale_rounds', sa.Column('enable_buy_with_stable', sa.Boolean(), nullable=False, server_default=sa.true()))


def downgrade() -> None:
    op.drop_column('presale_rounds', 'enable_buy_with_stable')
    op.drop_column('presale_rounds', 'enable_buy_with_native')
