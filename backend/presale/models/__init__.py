"""Database models"""
from presale.models.database import Base, get_db
from presale.models.round import PresaleRound
from presale.models.vesting import VestingRecord, BASE_MULTIPLIER, MONTH
from presale.models.event import PresaleEvent, EventType
from presale.models.ledger import LedgerBalance, LedgerAllowance

__all__ = [
    "Base",
    "get_db",
    "PresaleRound",
    "VestingRecord",
    "BASE_MULTIPLIER",
    "MONTH",
    "PresaleEvent",
    "EventType",
    # Simulated ledgers
    "LedgerBalance",
    "LedgerAllowance",
]
