"""Token ledger collaborators.

The presale never owns balances itself; it talks to a ledger per asset. `SqlLedger`
keeps balances in the service database and writes through the caller's session,
so its movements commit or roll back together with the presale operation.
"""
from typing import Optional, Protocol

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from presale.models.ledger import LedgerBalance, LedgerAllowance

logger = structlog.get_logger()


class Ledger(Protocol):
    """Ledger as seen from the presale's custody account (`holder`)."""

    async def balance_of(self, account: str) -> int:
        ...

    async def allowance(self, owner: str, spender: str) -> int:
        ...

    async def transfer(self, to: str, amount: int) -> bool:
        """Move `amount` from the holder to `to`."""
        ...

    async def transfer_from(self, owner: str, to: str, amount: int) -> bool:
        """Move `amount` from `owner` to `to` using the holder's allowance."""
        ...

    async def collect(self, sender: str, amount: int) -> bool:
        """Take a payment attached by `sender` into the holder's balance."""
        ...


class SqlLedger:
    """Database-backed ledger used for simulation and tests"""

    def __init__(self, db: AsyncSession, name: str, holder: str):
        self.db = db
        self.name = name
        self.holder = holder

    async def _balance_row(self, account: str, create: bool = False) -> Optional[LedgerBalance]:
        result = await self.db.execute(
            select(LedgerBalance).where(
                LedgerBalance.ledger == self.name,
                LedgerBalance.account == account,
            )
        )
        row = result.scalar_one_or_none()
        if row is None and create:
            row = LedgerBalance(ledger=self.name, account=account, balance=0)
            self.db.add(row)
        return row

    async def _allowance_row(self, owner: str, spender: str, create: bool = False) -> Optional[LedgerAllowance]:
        result = await self.db.execute(
            select(LedgerAllowance).where(
                LedgerAllowance.ledger == self.name,
                LedgerAllowance.owner == owner,
                LedgerAllowance.spender == spender,
            )
        )
        row = result.scalar_one_or_none()
        if row is None and create:
            row = LedgerAllowance(ledger=self.name, owner=owner, spender=spender, amount=0)
            self.db.add(row)
        return row

    async def balance_of(self, account: str) -> int:
        row = await self._balance_row(account)
        return row.balance if row else 0

    async def allowance(self, owner: str, spender: str) -> int:
        row = await self._allowance_row(owner, spender)
        return row.amount if row else 0

    async def mint(self, account: str, amount: int) -> int:
        """Credit new units to `account`; returns the new balance"""
        row = await self._balance_row(account, create=True)
        row.balance = row.balance + amount
        logger.info("Ledger mint", ledger=self.name, account=account, amount=amount)
        return row.balance

    async def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set (not add to) the allowance of `spender` over `owner`'s balance"""
        row = await self._allowance_row(owner, spender, create=True)
        row.amount = amount
        logger.info("Ledger approve", ledger=self.name, owner=owner, spender=spender, amount=amount)

    async def _move(self, sender: str, to: str, amount: int) -> bool:
        source = await self._balance_row(sender)
        if source is None or source.balance < amount:
            logger.warning(
                "Ledger transfer rejected",
                ledger=self.name,
                sender=sender,
                to=to,
                amount=amount,
                balance=source.balance if source else 0,
            )
            return False
        target = await self._balance_row(to, create=True)
        source.balance = source.balance - amount
        target.balance = target.balance + amount
        return True

    async def transfer(self, to: str, amount: int) -> bool:
        return await self._move(self.holder, to, amount)

    async def transfer_from(self, owner: str, to: str, amount: int) -> bool:
        allowance = await self._allowance_row(owner, self.holder)
        if allowance is None or allowance.amount < amount:
            return False
        if not await self._move(owner, to, amount):
            return False
        allowance.amount = allowance.amount - amount
        return True

    async def collect(self, sender: str, amount: int) -> bool:
        return await self._move(sender, self.holder, amount)
