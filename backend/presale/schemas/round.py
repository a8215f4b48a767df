"""Presale round schemas"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class RoundResponse(BaseModel):
    """Presale round response"""
    id: int
    sale_token_address: Optional[str] = None
    start_time: int
    end_time: int
    price: int
    tokens_to_sell: int
    base_decimals: int
    in_sale: int
    vesting_start_time: int
    vesting_cliff: int
    vesting_period: int
    enable_buy_with_native: bool
    enable_buy_with_stable: bool
    paused: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CreateRoundRequest(BaseModel):
    """Create a presale round.

    Times are unix seconds. `price` has 18 decimals in the reference currency;
    `base_decimals` is the sale token multiplier, e.g. 10**18.
    """
    start_time: int
    end_time: int
    price: int
    tokens_to_sell: int
    base_decimals: int
    vesting_start_time: int
    vesting_cliff: int = Field(0, ge=0)
    vesting_period: int = Field(0, ge=0)


class ChangeSaleTimesRequest(BaseModel):
    """0 leaves a bound unchanged"""
    start_time: int = Field(0, ge=0)
    end_time: int = Field(0, ge=0)


class ChangePriceRequest(BaseModel):
    price: int


class ChangeVestingStartRequest(BaseModel):
    vesting_start_time: int


class ChangeSaleTokenRequest(BaseModel):
    sale_token_address: str


class ChangeBuyOptionsRequest(BaseModel):
    enable_buy_with_native: Optional[bool] = None
    enable_buy_with_stable: Optional[bool] = None
