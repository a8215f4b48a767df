"""create presale rounds, vesting records and events

Revision ID: 3f9a1c2d7e4b
Revises: 
Create Date: 2026-09-28 10:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f9a1c2d7e4b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EVENT_TYPES = (
    'ROUND_CREATED', 'ROUND_UPDATED', 'SALE_TOKEN_UPDATED',
    'ROUND_PAUSED', 'ROUND_UNPAUSED', 'TOKENS_BOUGHT', 'TOKENS_CLAIMED',
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'presale_rounds',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sale_token_address', sa.String(length=64), nullable=True),
        sa.Column('start_time', sa.BigInteger(), nullable=False),
        sa.Column('end_time', sa.BigInteger(), nullable=False),
        # Uint256 columns are stored as decimal text
        sa.Column('price', sa.String(length=78), nullable=False),
        sa.Column('tokens_to_sell', sa.String(length=78), nullable=False),
        sa.Column('base_decimals', sa.String(length=78), nullable=False),
        sa.Column('in_sale', sa.String(length=78), nullable=False),
        sa.Column('vesting_start_time', sa.BigInteger(), nullable=False),
        sa.Column('vesting_cliff', sa.BigInteger(), nullable=False),
        sa.Column('vesting_period', sa.BigInteger(), nullable=False),
        sa.Column('paused', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'vesting_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_address', sa.String(length=64), nullable=False),
        sa.Column('round_id', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.String(length=78), nullable=False),
        sa.Column('claimed_amount', sa.String(length=78), nullable=False),
        sa.Column('claim_start', sa.BigInteger(), nullable=False),
        sa.Column('claim_end', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['round_id'], ['presale_rounds.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_address', 'round_id', name='uq_vesting_user_round'),
    )
    op.create_index('ix_vesting_records_user_address', 'vesting_records', ['user_address'])
    op.create_index('ix_vesting_records_round_id', 'vesting_records', ['round_id'])

    op.create_table(
        'presale_events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('round_id', sa.Integer(), nullable=False),
        sa.Column('event_type', sa.Enum(*EVENT_TYPES, name='eventtype'), nullable=False),
        sa.Column('block_time', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('account', sa.String(length=64), nullable=True),
        sa.Column('amount', sa.String(length=78), nullable=True),
        sa.Column('key', sa.String(length=20), nullable=True),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_presale_events_round_id', 'presale_events', ['round_id'])
    op.create_index('ix_presale_events_event_type', 'presale_events', ['event_type'])
    op.create_index('ix_presale_events_account', 'presale_events', ['account'])
    op.create_index('ix_presale_events_round_type', 'presale_events', ['round_id', 'event_type'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('presale_events')
    op.drop_table('vesting_records')
    op.drop_table('presale_rounds')
    sa.Enum(name='eventtype').drop(op.get_bind(), checkfirst=True)
