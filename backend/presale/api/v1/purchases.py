"""Quote and purchase API endpoints"""
from fastapi import APIRouter, Depends, Path, Query

from presale.api.deps import get_caller, get_presale_service
from presale.schemas.purchase import (
    QuoteResponse,
    BuyWithStableRequest,
    BuyWithNativeRequest,
    OraclePriceResponse,
)
from presale.schemas.vesting import VestingRecordResponse
from presale.services.presale import PresaleService

router = APIRouter()


@router.get("/rounds/{round_id}/quote/stable", response_model=QuoteResponse)
async def quote_for_stable(
    round_id: int = Path(...),
    amount: int = Query(..., ge=0),
    service: PresaleService = Depends(get_presale_service),
):
    """Stablecoin cost of `amount` whole tokens"""
    cost = await service.pricing.quote_for_stable(round_id, amount)
    return QuoteResponse(round_id=round_id, token_amount=amount, currency="stable", cost=cost)


@router.get("/rounds/{round_id}/quote/native", response_model=QuoteResponse)
async def quote_for_native(
    round_id: int = Path(...),
    amount: int = Query(..., ge=0),
    service: PresaleService = Depends(get_presale_service),
):
    """Native-currency cost of `amount` whole tokens at the current oracle rate"""
    cost = await service.pricing.quote_for_native(round_id, amount)
    return QuoteResponse(round_id=round_id, token_amount=amount, currency="native", cost=cost)


@router.post("/rounds/{round_id}/buy/stable", response_model=VestingRecordResponse)
async def buy_with_stable(
    request: BuyWithStableRequest,
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    """
    Buy tokens with stablecoin.

    The caller must first approve the presale address for the quoted cost.
    Returns the caller's updated vesting record.
    """
    record = await service.purchases.buy_with_stable(caller, round_id, request.token_amount)
    return VestingRecordResponse.model_validate(record)


@router.post("/rounds/{round_id}/buy/native", response_model=VestingRecordResponse)
async def buy_with_native(
    request: BuyWithNativeRequest,
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    """Buy tokens with native currency; any overpayment is refunded."""
    record = await service.purchases.buy_with_native(
        caller, round_id, request.token_amount, request.paid_amount
    )
    return VestingRecordResponse.model_validate(record)


@router.get("/oracle/price", response_model=OraclePriceResponse)
async def get_latest_price(service: PresaleService = Depends(get_presale_service)):
    """Current oracle rate normalized to 18 decimals"""
    rate = await service.pricing.latest_rate()
    return OraclePriceResponse(rate=rate)
