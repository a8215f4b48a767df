"""Vesting and claim API endpoints"""
from fastapi import APIRouter, Depends, HTTPException, Path

from presale.api.deps import get_presale_service
from presale.schemas.vesting import (
    VestingRecordResponse,
    ClaimableResponse,
    ClaimRequest,
    ClaimMultipleRequest,
    ClaimResponse,
    ClaimMultipleResponse,
)
from presale.services.context import normalize_address
from presale.services.presale import PresaleService

router = APIRouter()


@router.get("/{round_id}/vesting/{user_address}", response_model=VestingRecordResponse)
async def get_vesting_record(
    round_id: int = Path(...),
    user_address: str = Path(...),
    service: PresaleService = Depends(get_presale_service),
):
    await service.registry.get_round(round_id)
    record = await service.purchases.get_vesting(user_address, round_id)
    if not record:
        raise HTTPException(status_code=404, detail="Vesting record not found")
    return VestingRecordResponse.model_validate(record)


@router.get("/{round_id}/claimable/{user_address}", response_model=ClaimableResponse)
async def get_claimable_amount(
    round_id: int = Path(...),
    user_address: str = Path(...),
    service: PresaleService = Depends(get_presale_service),
):
    amount = await service.claims.claimable_amount(user_address, round_id)
    return ClaimableResponse(
        user_address=normalize_address(user_address),
        round_id=round_id,
        claimable_amount=amount,
    )


@router.post("/{round_id}/claim", response_model=ClaimResponse)
async def claim(
    request: ClaimRequest,
    round_id: int = Path(...),
    service: PresaleService = Depends(get_presale_service),
):
    """
    Release unlocked tokens to a user.

    Any caller may claim on behalf of any user; tokens are always sent to the user.
    """
    amount = await service.claims.claim(request.user_address, round_id)
    return ClaimResponse(
        user_address=normalize_address(request.user_address),
        round_id=round_id,
        amount=amount,
    )


@router.post("/{round_id}/claim-multiple", response_model=ClaimMultipleResponse)
async def claim_multiple(
    request: ClaimMultipleRequest,
    round_id: int = Path(...),
    service: PresaleService = Depends(get_presale_service),
):
    """Claim for several users at once. Any failure aborts the whole batch."""
    amounts = await service.claims.claim_multiple(request.user_addresses, round_id)
    claims = [
        ClaimResponse(user_address=normalize_address(user), round_id=round_id, amount=amount)
        for user, amount in zip(request.user_addresses, amounts)
    ]
    return ClaimMultipleResponse(round_id=round_id, claims=claims, total_amount=sum(amounts))
