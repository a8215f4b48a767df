"""Vesting and claim schemas"""
from typing import List
from pydantic import BaseModel, Field


class VestingRecordResponse(BaseModel):
    user_address: str
    round_id: int
    total_amount: int
    claimed_amount: int
    claim_start: int
    claim_end: int

    class Config:
        from_attributes = True


class ClaimableResponse(BaseModel):
    user_address: str
    round_id: int
    claimable_amount: int


class ClaimRequest(BaseModel):
    user_address: str


class ClaimMultipleRequest(BaseModel):
    user_addresses: List[str] = Field(default_factory=list)


class ClaimResponse(BaseModel):
    user_address: str
    round_id: int
    amount: int


class ClaimMultipleResponse(BaseModel):
    round_id: int
    claims: List[ClaimResponse]
    total_amount: int
