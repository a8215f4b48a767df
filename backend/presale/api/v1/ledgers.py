"""Simulated ledger API endpoints for local runs"""
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from presale.config import get_settings
from presale.models.database import get_db
from presale.schemas.ledger import MintRequest, ApproveRequest, BalanceResponse
from presale.services.context import normalize_address
from presale.services.ledger import SqlLedger

router = APIRouter()


def _ledger(db: AsyncSession, name: str) -> SqlLedger:
    return SqlLedger(db, normalize_address(name), normalize_address(get_settings().presale_address))


@router.post("/{ledger}/mint", response_model=BalanceResponse)
async def mint(
    request: MintRequest,
    ledger: str = Path(...),
    db: AsyncSession = Depends(get_db),
):
    """Credit simulated funds to an account"""
    account = normalize_address(request.account)
    sql_ledger = _ledger(db, ledger)
    balance = await sql_ledger.mint(account, request.amount)
    await db.commit()
    return BalanceResponse(ledger=sql_ledger.name, account=account, balance=balance)


@router.post("/{ledger}/approve")
async def approve(
    request: ApproveRequest,
    ledger: str = Path(...),
    db: AsyncSession = Depends(get_db),
):
    """Set a spender allowance, e.g. the presale address over a buyer's stablecoin"""
    sql_ledger = _ledger(db, ledger)
    await sql_ledger.approve(
        normalize_address(request.owner), normalize_address(request.spender), request.amount
    )
    await db.commit()
    return {"ledger": sql_ledger.name, "allowance": request.amount}


@router.get("/{ledger}/balance/{account}", response_model=BalanceResponse)
async def get_balance(
    ledger: str = Path(...),
    account: str = Path(...),
    db: AsyncSession = Depends(get_db),
):
    sql_ledger = _ledger(db, ledger)
    account = normalize_address(account)
    balance = await sql_ledger.balance_of(account)
    return BalanceResponse(ledger=sql_ledger.name, account=account, balance=balance)
