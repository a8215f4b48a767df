"""Purchase and quote schemas"""
from pydantic import BaseModel, Field


class QuoteResponse(BaseModel):
    round_id: int
    token_amount: int
    currency: str  # stable, native
    cost: int  # Smallest units of the payment currency


class BuyWithStableRequest(BaseModel):
    token_amount: int = Field(..., ge=0)


class BuyWithNativeRequest(BaseModel):
    token_amount: int = Field(..., ge=0)
    paid_amount: int = Field(..., ge=0)  # Value attached by the buyer, in wei


class OraclePriceResponse(BaseModel):
    rate: int  # Reference-currency units per native unit, 18 decimals
    decimals: int = 18
