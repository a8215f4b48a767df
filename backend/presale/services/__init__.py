"""Presale Backend Services"""
from .context import PresaleContext
from .presale import PresaleService
from .pricing import PricingEngine, normalize_rate, stable_cost, native_cost
from .ledger import Ledger, SqlLedger
from .oracle import RateOracle, StaticRateOracle, HttpRateOracle, get_oracle, close_oracle

__all__ = [
    "PresaleContext",
    "PresaleService",
    # Pricing
    "PricingEngine",
    "normalize_rate",
    "stable_cost",
    "native_cost",
    # Collaborators
    "Ledger",
    "SqlLedger",
    "RateOracle",
    "StaticRateOracle",
    "HttpRateOracle",
    "get_oracle",
    "close_oracle",
]
