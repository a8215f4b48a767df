"""Vesting/claim engine: releasing unlocked tokens exactly once."""
from typing import List

import structlog

from presale.models.event import EventType
from presale.models.vesting import VestingRecord
from presale.services.context import PresaleContext, normalize_address
from presale.services.errors import (
    NothingToClaim,
    SaleTokenUnset,
    ZeroClaimAmount,
    AlreadyClaimed,
    InsufficientContractBalance,
    TransferFailed,
    EmptyUserList,
)
from presale.services.purchases import PurchaseAccounting

logger = structlog.get_logger()


class ClaimEngine:
    """
    Pays out vested tokens from the presale's sale-token balance.

    Anyone may trigger a claim for any user; tokens always go to the user.
    """

    def __init__(self, ctx: PresaleContext):
        self.ctx = ctx
        self._purchases = PurchaseAccounting(ctx)

    async def _record(self, user: str, round_id: int) -> VestingRecord:
        await self.ctx.get_round(round_id)
        record = await self._purchases.get_vesting(user, round_id)
        if record is None or record.total_amount == 0:
            raise NothingToClaim(user=user, round_id=round_id)
        return record

    async def claimable_amount(self, user: str, round_id: int) -> int:
        """Tokens `user` could claim in `round_id` right now"""
        record = await self._record(user, round_id)
        return record.claimable_at(self.ctx.now())

    async def _claim(self, user: str, round_id: int, batch: bool = False) -> int:
        user = normalize_address(user)
        record = await self._record(user, round_id)
        presale_round = await self.ctx.get_round(round_id)

        if record.fully_claimed:
            raise AlreadyClaimed(user=user, round_id=round_id)
        amount = record.claimable_at(self.ctx.now())
        if amount <= 0:
            raise ZeroClaimAmount(user=user, round_id=round_id)
        if not presale_round.sale_token_address:
            raise SaleTokenUnset(round_id=round_id)

        ledger = self.ctx.sale_token_ledger(presale_round.sale_token_address)
        held = await ledger.balance_of(self.ctx.holder)
        if amount > held:
            raise InsufficientContractBalance(amount=amount, held=held)

        record.claimed_amount = record.claimed_amount + amount
        if not await ledger.transfer(user, amount):
            raise TransferFailed(user=user, amount=amount)

        await self.ctx.events.record(
            EventType.TOKENS_CLAIMED,
            round_id=round_id,
            block_time=self.ctx.now(),
            account=user,
            amount=amount,
            data={"batch": batch, "claimed_total": str(record.claimed_amount)},
        )
        return amount

    async def claim(self, user: str, round_id: int) -> int:
        """Release everything currently unlocked for `user`; returns the amount paid"""
        async with self.ctx.atomic("claim", user=user, round_id=round_id):
            amount = await self._claim(user, round_id)

        logger.info("Tokens claimed", round_id=round_id, user=user, amount=amount)
        return amount

    async def claim_multiple(self, users: List[str], round_id: int) -> List[int]:
        """Claim for each user in order. One failure aborts the whole batch."""
        async with self.ctx.atomic("claim_multiple", round_id=round_id, users=len(users)):
            if not users:
                raise EmptyUserList(round_id=round_id)
            amounts = [await self._claim(user, round_id, batch=True) for user in users]

        logger.info(
            "Batch claim completed",
            round_id=round_id,
            users=len(users),
            total_amount=sum(amounts),
        )
        return amounts
