"""Vesting record models"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, BigInteger, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from presale.models.database import Base
from presale.models.types import Uint256

BASE_MULTIPLIER = 10**18
MONTH = 30 * 86400


class VestingRecord(Base):
    """Tokens bought by one user in one round, and how many were paid out.

    Release is bucketed into whole 30-day months between claim_start and claim_end.
    Once claim_end passes, whatever remains unclaimed is released in full.
    """
    __tablename__ = "vesting_records"
    __table_args__ = (
        UniqueConstraint("user_address", "round_id", name="uq_vesting_user_round"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_address = Column(String(64), nullable=False, index=True)
    round_id = Column(Integer, ForeignKey("presale_rounds.id"), nullable=False, index=True)
    total_amount = Column(Uint256, nullable=False, default=0)
    claimed_amount = Column(Uint256, nullable=False, default=0)
    # Fixed at first purchase; later vesting edits on the round do not move them
    claim_start = Column(BigInteger, nullable=False)
    claim_end = Column(BigInteger, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    round = relationship("PresaleRound", back_populates="vesting_records")

    @property
    def remaining(self) -> int:
        return self.total_amount - self.claimed_amount

    @property
    def fully_claimed(self) -> bool:
        return self.claimed_amount >= self.total_amount

    def months_elapsed(self, now: int) -> int:
        """Whole 30-day months elapsed since claim_start"""
        if now < self.claim_start:
            return 0
        return (now - self.claim_start) // MONTH

    def claimable_at(self, now: int) -> int:
        """Unlocked but unclaimed amount at unix time `now`.

        Scaling order matters: the per-month slice is computed with an extra
        BASE_MULTIPLIER and divided back out only after multiplying by months.
        """
        if now < self.claim_start:
            return 0

        if now >= self.claim_end:
            return self.total_amount - self.claimed_amount

        per_month = (self.total_amount * BASE_MULTIPLIER * MONTH) // (self.claim_end - self.claim_start)
        unlocked = (self.months_elapsed(now) * per_month) // BASE_MULTIPLIER
        return unlocked - self.claimed_amount

    def __repr__(self):
        return f"<VestingRecord {self.user_address[:10]}... round {self.round_id} ({self.claimed_amount}/{self.total_amount})>"
