"""Simulated ledger models (stablecoin, native currency, sale tokens)"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint

from presale.models.database import Base
from presale.models.types import Uint256


class LedgerBalance(Base):
    """Balance of one account on one named ledger"""
    __tablename__ = "ledger_balances"
    __table_args__ = (
        UniqueConstraint("ledger", "account", name="uq_ledger_balance_account"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    ledger = Column(String(64), nullable=False, index=True)
    account = Column(String(64), nullable=False, index=True)
    balance = Column(Uint256, nullable=False, default=0)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class LedgerAllowance(Base):
    """Amount `spender` may move out of `owner`'s balance on a ledger"""
    __tablename__ = "ledger_allowances"
    __table_args__ = (
        UniqueConstraint("ledger", "owner", "spender", name="uq_ledger_allowance"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    ledger = Column(String(64), nullable=False, index=True)
    owner = Column(String(64), nullable=False, index=True)
    spender = Column(String(64), nullable=False)
    amount = Column(Uint256, nullable=False, default=0)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
