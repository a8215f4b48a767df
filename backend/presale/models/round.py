"""Presale round models"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, BigInteger, Boolean, DateTime
from sqlalchemy.orm import relationship

from presale.models.database import Base
from presale.models.types import Uint256


class PresaleRound(Base):
    """One time-boxed presale offering.

    Times are unix seconds. `price` is in the reference currency with 18 decimals;
    `base_decimals` is the sale token's scaling multiplier (10**18 for an 18-decimal
    token). `tokens_to_sell` and `in_sale` are counted in whole tokens.
    """
    __tablename__ = "presale_rounds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_token_address = Column(String(64), nullable=True)
    start_time = Column(BigInteger, nullable=False)
    end_time = Column(BigInteger, nullable=False)
    price = Column(Uint256, nullable=False)
    tokens_to_sell = Column(Uint256, nullable=False)
    base_decimals = Column(Uint256, nullable=False)
    in_sale = Column(Uint256, nullable=False)
    vesting_start_time = Column(BigInteger, nullable=False)
    vesting_cliff = Column(BigInteger, nullable=False, default=0)
    vesting_period = Column(BigInteger, nullable=False, default=0)
    enable_buy_with_native = Column(Boolean, nullable=False, default=True)
    enable_buy_with_stable = Column(Boolean, nullable=False, default=True)
    paused = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    vesting_records = relationship("VestingRecord", back_populates="round", lazy="dynamic")

    @property
    def claim_start(self) -> int:
        return self.vesting_start_time + self.vesting_cliff

    @property
    def claim_end(self) -> int:
        return self.vesting_start_time + self.vesting_cliff + self.vesting_period

    def has_started(self, now: int) -> bool:
        return now >= self.start_time

    def has_ended(self, now: int) -> bool:
        return now >= self.end_time

    def is_open(self, now: int) -> bool:
        """Buying window is [start_time, end_time)"""
        return self.start_time <= now < self.end_time

    def __repr__(self):
        return f"<PresaleRound {self.id} ({self.in_sale}/{self.tokens_to_sell} left)>"
