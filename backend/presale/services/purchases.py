"""Purchase accounting for stablecoin and native-currency buys."""
from typing import Optional

import structlog
from sqlalchemy import select

from presale.models.event import EventType
from presale.models.round import PresaleRound
from presale.models.vesting import VestingRecord
from presale.services.context import PresaleContext, normalize_address
from presale.services.errors import (
    InvalidTime,
    Paused,
    BuyDisabled,
    ZeroAmount,
    ExceedsAvailable,
    InsufficientAllowance,
    InsufficientPayment,
    PaymentFailed,
)
from presale.services.pricing import PricingEngine

logger = structlog.get_logger()

STABLE = "stable"
NATIVE = "native"


class PurchaseAccounting:
    """
    Validates a purchase, takes payment and credits the buyer's vesting record.

    Both payment paths share one pipeline; only the payment step differs.
    """

    def __init__(self, ctx: PresaleContext, pricing: Optional[PricingEngine] = None):
        self.ctx = ctx
        self.pricing = pricing or PricingEngine(ctx)

    async def get_vesting(self, user: str, round_id: int) -> Optional[VestingRecord]:
        result = await self.ctx.db.execute(
            self.ctx.lock_rows(
                select(VestingRecord).where(
                    VestingRecord.user_address == normalize_address(user),
                    VestingRecord.round_id == round_id,
                )
            )
        )
        return result.scalar_one_or_none()

    def _check_sale_state(self, presale_round: PresaleRound, token_amount: int, path: str) -> None:
        now = self.ctx.now()
        if not presale_round.is_open(now):
            raise InvalidTime("Invalid time for buying", now=now)
        if presale_round.paused:
            raise Paused()
        if token_amount <= 0:
            raise ZeroAmount()
        if token_amount > presale_round.in_sale:
            raise ExceedsAvailable(requested=token_amount, in_sale=presale_round.in_sale)
        if path == NATIVE and not presale_round.enable_buy_with_native:
            raise BuyDisabled("Not allowed to buy with native currency")
        if path == STABLE and not presale_round.enable_buy_with_stable:
            raise BuyDisabled("Not allowed to buy with stablecoin")

    async def _credit(self, buyer: str, presale_round: PresaleRound, token_amount: int) -> VestingRecord:
        """Consume allocation and add the tokens to the buyer's vesting record"""
        presale_round.in_sale = presale_round.in_sale - token_amount
        credited = token_amount * presale_round.base_decimals

        record = await self.get_vesting(buyer, presale_round.id)
        if record is None:
            record = VestingRecord(
                user_address=buyer,
                round_id=presale_round.id,
                total_amount=credited,
                claimed_amount=0,
                claim_start=presale_round.claim_start,
                claim_end=presale_round.claim_end,
            )
            self.ctx.db.add(record)
        else:
            record.total_amount = record.total_amount + credited
        await self.ctx.db.flush()
        return record

    async def buy_with_stable(self, buyer: str, round_id: int, token_amount: int) -> VestingRecord:
        """
        Buy `token_amount` whole tokens paying in stablecoin.

        The buyer must have approved the presale for at least the quoted cost on the
        stablecoin ledger. The exact cost is pulled from the buyer to the owner.
        """
        buyer = normalize_address(buyer)
        async with self.ctx.atomic("buy_with_stable", buyer=buyer, round_id=round_id):
            presale_round = await self.ctx.get_round(round_id)
            self._check_sale_state(presale_round, token_amount, STABLE)

            cost = await self.pricing.quote_for_stable(round_id, token_amount)
            ledger = self.ctx.stable_ledger()
            allowance = await ledger.allowance(buyer, self.ctx.holder)
            if cost > allowance:
                raise InsufficientAllowance(cost=cost, allowance=allowance)
            if not await ledger.transfer_from(buyer, self.ctx.owner, cost):
                raise PaymentFailed("Token payment failed")

            record = await self._credit(buyer, presale_round, token_amount)
            await self.ctx.events.record(
                EventType.TOKENS_BOUGHT,
                round_id=round_id,
                block_time=self.ctx.now(),
                account=buyer,
                amount=token_amount,
                data={"currency": STABLE, "cost": str(cost)},
            )

        logger.info(
            "Tokens bought with stablecoin",
            round_id=round_id,
            buyer=buyer,
            token_amount=token_amount,
            cost=cost,
        )
        return record

    async def buy_with_native(self, buyer: str, round_id: int, token_amount: int, paid_amount: int) -> VestingRecord:
        """
        Buy `token_amount` whole tokens paying in native currency.

        `paid_amount` is the value attached by the buyer. The quoted cost goes to the
        owner and any excess is refunded; if the refund fails the purchase fails.
        """
        buyer = normalize_address(buyer)
        async with self.ctx.atomic("buy_with_native", buyer=buyer, round_id=round_id):
            presale_round = await self.ctx.get_round(round_id)
            self._check_sale_state(presale_round, token_amount, NATIVE)

            cost = await self.pricing.quote_for_native(round_id, token_amount)
            if paid_amount < cost:
                raise InsufficientPayment(cost=cost, paid=paid_amount)

            ledger = self.ctx.native_ledger()
            if not await ledger.collect(buyer, paid_amount):
                raise PaymentFailed("Payment could not be collected")

            record = await self._credit(buyer, presale_round, token_amount)

            if not await ledger.transfer(self.ctx.owner, cost):
                raise PaymentFailed("Native payment failed")
            excess = paid_amount - cost
            if excess > 0 and not await ledger.transfer(buyer, excess):
                raise PaymentFailed("Refund failed")

            await self.ctx.events.record(
                EventType.TOKENS_BOUGHT,
                round_id=round_id,
                block_time=self.ctx.now(),
                account=buyer,
                amount=token_amount,
                data={"currency": NATIVE, "cost": str(cost), "refund": str(excess)},
            )

        logger.info(
            "Tokens bought with native currency",
            round_id=round_id,
            buyer=buyer,
            token_amount=token_amount,
            cost=cost,
            refund=excess,
        )
        return record
