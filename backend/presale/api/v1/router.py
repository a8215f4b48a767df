"""API v1 router aggregation"""
from fastapi import APIRouter

from presale.api.v1 import rounds, purchases, vesting, events, ledgers

api_router = APIRouter()

api_router.include_router(rounds.router, prefix="/rounds", tags=["Rounds"])
api_router.include_router(vesting.router, prefix="/rounds", tags=["Vesting"])
api_router.include_router(purchases.router, tags=["Purchases"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(ledgers.router, prefix="/ledgers", tags=["Ledgers"])
