"""Presale round API endpoints"""
from typing import List
from fastapi import APIRouter, Depends, Path

from presale.api.deps import get_caller, get_presale_service
from presale.schemas.round import (
    RoundResponse,
    CreateRoundRequest,
    ChangeSaleTimesRequest,
    ChangePriceRequest,
    ChangeVestingStartRequest,
    ChangeSaleTokenRequest,
    ChangeBuyOptionsRequest,
)
from presale.services.presale import PresaleService

router = APIRouter()


@router.post("", response_model=RoundResponse)
async def create_round(
    request: CreateRoundRequest,
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    """
    Create a new presale round (owner only).

    The round opens for buying at start_time with its whole allocation in sale and
    both payment paths enabled.
    """
    presale_round = await service.registry.create_round(
        caller,
        start_time=request.start_time,
        end_time=request.end_time,
        price=request.price,
        tokens_to_sell=request.tokens_to_sell,
        base_decimals=request.base_decimals,
        vesting_start_time=request.vesting_start_time,
        vesting_cliff=request.vesting_cliff,
        vesting_period=request.vesting_period,
    )
    return RoundResponse.model_validate(presale_round)


@router.get("", response_model=List[RoundResponse])
async def list_rounds(service: PresaleService = Depends(get_presale_service)):
    """List all rounds, oldest first."""
    rounds = await service.registry.list_rounds()
    return [RoundResponse.model_validate(r) for r in rounds]


@router.get("/{round_id}", response_model=RoundResponse)
async def get_round(
    round_id: int = Path(...),
    service: PresaleService = Depends(get_presale_service),
):
    presale_round = await service.registry.get_round(round_id)
    return RoundResponse.model_validate(presale_round)


@router.patch("/{round_id}/times", response_model=RoundResponse)
async def change_sale_times(
    request: ChangeSaleTimesRequest,
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    """Move the sale window. A 0 bound is left unchanged."""
    presale_round = await service.registry.change_sale_times(
        caller, round_id, request.start_time, request.end_time
    )
    return RoundResponse.model_validate(presale_round)


@router.patch("/{round_id}/price", response_model=RoundResponse)
async def change_price(
    request: ChangePriceRequest,
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    presale_round = await service.registry.change_price(caller, round_id, request.price)
    return RoundResponse.model_validate(presale_round)


@router.patch("/{round_id}/vesting-start", response_model=RoundResponse)
async def change_vesting_start_time(
    request: ChangeVestingStartRequest,
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    presale_round = await service.registry.change_vesting_start_time(
        caller, round_id, request.vesting_start_time
    )
    return RoundResponse.model_validate(presale_round)


@router.patch("/{round_id}/sale-token", response_model=RoundResponse)
async def change_sale_token_address(
    request: ChangeSaleTokenRequest,
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    presale_round = await service.registry.change_sale_token_address(
        caller, round_id, request.sale_token_address
    )
    return RoundResponse.model_validate(presale_round)


@router.patch("/{round_id}/buy-options", response_model=RoundResponse)
async def change_buy_options(
    request: ChangeBuyOptionsRequest,
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    presale_round = await service.registry.change_buy_options(
        caller,
        round_id,
        enable_buy_with_native=request.enable_buy_with_native,
        enable_buy_with_stable=request.enable_buy_with_stable,
    )
    return RoundResponse.model_validate(presale_round)


@router.post("/{round_id}/pause", response_model=RoundResponse)
async def pause_round(
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    presale_round = await service.registry.pause(caller, round_id)
    return RoundResponse.model_validate(presale_round)


@router.post("/{round_id}/unpause", response_model=RoundResponse)
async def unpause_round(
    round_id: int = Path(...),
    caller: str = Depends(get_caller),
    service: PresaleService = Depends(get_presale_service),
):
    presale_round = await service.registry.unpause(caller, round_id)
    return RoundResponse.model_validate(presale_round)
