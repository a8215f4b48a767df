"""Simulated ledger schemas"""
from pydantic import BaseModel, Field


class MintRequest(BaseModel):
    account: str
    amount: int = Field(..., gt=0)


class ApproveRequest(BaseModel):
    owner: str
    spender: str
    amount: int = Field(..., ge=0)


class BalanceResponse(BaseModel):
    ledger: str
    account: str
    balance: int
