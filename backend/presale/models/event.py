"""Presale event log model."""
import enum
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, BigInteger, DateTime, JSON, Index, Enum as SQLEnum
)

from presale.models.database import Base
from presale.models.types import Uint256


class EventType(str, enum.Enum):
    """All observable presale events."""
    # Round registry
    ROUND_CREATED = "round_created"
    ROUND_UPDATED = "round_updated"
    SALE_TOKEN_UPDATED = "sale_token_updated"
    ROUND_PAUSED = "round_paused"
    ROUND_UNPAUSED = "round_unpaused"

    # Purchases
    TOKENS_BOUGHT = "tokens_bought"

    # Claims
    TOKENS_CLAIMED = "tokens_claimed"


class PresaleEvent(Base):
    """
    Append-only log of state transitions for external indexers.

    Rows are written in the same transaction as the change they describe, so a
    rolled-back operation leaves no event behind.
    """
    __tablename__ = "presale_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    round_id = Column(Integer, nullable=False, index=True)
    event_type = Column(SQLEnum(EventType), nullable=False, index=True)

    # Unix time of the operation as seen by the state machine clock
    block_time = Column(BigInteger, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    account = Column(String(64), nullable=True, index=True)  # buyer, claimant or owner
    amount = Column(Uint256, nullable=True)  # tokens bought or claimed
    key = Column(String(20), nullable=True)  # ROUND_UPDATED: START, END, PRICE, ...
    data = Column(JSON, nullable=True)

    __table_args__ = (
        Index("ix_presale_events_round_type", "round_id", "event_type"),
    )

    def __repr__(self):
        return f"<PresaleEvent {self.id} {self.event_type.value} round={self.round_id}>"
