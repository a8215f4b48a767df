"""Round registry: creating presale rounds and editing them before and during the sale."""
from typing import Optional

import structlog
from sqlalchemy import select

from presale.models.event import EventType
from presale.models.round import PresaleRound
from presale.services.context import PresaleContext, normalize_address, is_zero_address
from presale.services.errors import (
    InvalidTime,
    InvalidParams,
    SaleTimeInPast,
    SaleAlreadyStarted,
    SaleAlreadyEnded,
    InvalidEndTime,
    ZeroPrice,
    ZeroTokens,
    ZeroDecimals,
    ZeroAddress,
    VestingBeforeEnd,
    AlreadyPaused,
    NotPaused,
)

logger = structlog.get_logger()


class RoundRegistry:
    """Owner-only round configuration.

    Every mutator checks the caller first, then loads the round, then applies its
    guards in order. Nothing is written until every guard has passed.
    """

    def __init__(self, ctx: PresaleContext):
        self.ctx = ctx

    async def get_round(self, round_id: int) -> PresaleRound:
        return await self.ctx.get_round(round_id)

    async def list_rounds(self) -> list[PresaleRound]:
        result = await self.ctx.db.execute(select(PresaleRound).order_by(PresaleRound.id))
        return list(result.scalars().all())

    async def _updated(self, presale_round: PresaleRound, key: str, previous, new) -> None:
        await self.ctx.events.record(
            EventType.ROUND_UPDATED,
            round_id=presale_round.id,
            block_time=self.ctx.now(),
            account=self.ctx.owner,
            key=key,
            data={"previous": str(previous), "new": str(new)},
        )

    async def create_round(
        self,
        caller: str,
        start_time: int,
        end_time: int,
        price: int,
        tokens_to_sell: int,
        base_decimals: int,
        vesting_start_time: int,
        vesting_cliff: int,
        vesting_period: int,
    ) -> PresaleRound:
        """
        Create a new presale round.

        Args:
            caller: Must be the owner
            start_time: Unix time buying opens; must be in the future
            end_time: Unix time buying closes; must be after start_time
            price: Token price in the reference currency, 18 decimals
            tokens_to_sell: Allocation in whole tokens
            base_decimals: Sale token scaling multiplier (10**18 for 18 decimals)
            vesting_start_time: Must not precede end_time
            vesting_cliff: Seconds after vesting start before anything unlocks
            vesting_period: Seconds after the cliff over which tokens unlock

        Returns:
            The stored round; ids are sequential from 1
        """
        async with self.ctx.atomic("create_round", caller=caller):
            self.ctx.require_owner(caller)
            now = self.ctx.now()

            if not (start_time > now and end_time > start_time):
                raise InvalidTime(start_time=start_time, end_time=end_time)
            if price <= 0:
                raise ZeroPrice()
            if tokens_to_sell <= 0:
                raise ZeroTokens()
            if base_decimals <= 0:
                raise ZeroDecimals()
            if vesting_start_time < end_time:
                raise VestingBeforeEnd(vesting_start_time=vesting_start_time, end_time=end_time)

            presale_round = PresaleRound(
                sale_token_address=None,
                start_time=start_time,
                end_time=end_time,
                price=price,
                tokens_to_sell=tokens_to_sell,
                base_decimals=base_decimals,
                in_sale=tokens_to_sell,
                vesting_start_time=vesting_start_time,
                vesting_cliff=vesting_cliff,
                vesting_period=vesting_period,
                enable_buy_with_native=True,
                enable_buy_with_stable=True,
                paused=False,
            )
            self.ctx.db.add(presale_round)
            await self.ctx.db.flush()

            await self.ctx.events.record(
                EventType.ROUND_CREATED,
                round_id=presale_round.id,
                block_time=now,
                account=self.ctx.owner,
                amount=tokens_to_sell,
                data={
                    "start_time": start_time,
                    "end_time": end_time,
                    "price": str(price),
                    "vesting_start_time": vesting_start_time,
                },
            )

        logger.info(
            "Presale round created",
            round_id=presale_round.id,
            start_time=start_time,
            end_time=end_time,
            tokens_to_sell=tokens_to_sell,
        )
        return presale_round

    async def change_sale_times(
        self,
        caller: str,
        round_id: int,
        start_time: Optional[int],
        end_time: Optional[int],
    ) -> PresaleRound:
        """Move the sale window. 0 or None leaves that bound unchanged."""
        async with self.ctx.atomic("change_sale_times", caller=caller, round_id=round_id):
            self.ctx.require_owner(caller)
            presale_round = await self.ctx.get_round(round_id)
            now = self.ctx.now()

            if not start_time and not end_time:
                raise InvalidParams()

            new_start = presale_round.start_time
            if start_time:
                if start_time < now:
                    raise SaleTimeInPast(start_time=start_time)
                if presale_round.has_started(now):
                    raise SaleAlreadyStarted()
                new_start = start_time

            new_end = presale_round.end_time
            if end_time:
                if end_time <= new_start:
                    raise InvalidEndTime(end_time=end_time)
                if presale_round.has_ended(now):
                    raise SaleAlreadyEnded()
                new_end = end_time

            # A start-only edit must still leave the window non-empty
            if new_end <= new_start:
                raise InvalidEndTime(end_time=new_end)
            if presale_round.vesting_start_time < new_end:
                raise VestingBeforeEnd(vesting_start_time=presale_round.vesting_start_time, end_time=new_end)

            if new_start != presale_round.start_time:
                previous = presale_round.start_time
                presale_round.start_time = new_start
                await self._updated(presale_round, "START", previous, new_start)
            if new_end != presale_round.end_time:
                previous = presale_round.end_time
                presale_round.end_time = new_end
                await self._updated(presale_round, "END", previous, new_end)

        return presale_round

    async def change_price(self, caller: str, round_id: int, price: int) -> PresaleRound:
        async with self.ctx.atomic("change_price", caller=caller, round_id=round_id):
            self.ctx.require_owner(caller)
            presale_round = await self.ctx.get_round(round_id)

            if price <= 0:
                raise ZeroPrice()
            if presale_round.has_started(self.ctx.now()):
                raise SaleAlreadyStarted()

            previous = presale_round.price
            presale_round.price = price
            await self._updated(presale_round, "PRICE", previous, price)

        return presale_round

    async def change_vesting_start_time(self, caller: str, round_id: int, vesting_start_time: int) -> PresaleRound:
        async with self.ctx.atomic("change_vesting_start_time", caller=caller, round_id=round_id):
            self.ctx.require_owner(caller)
            presale_round = await self.ctx.get_round(round_id)

            if presale_round.has_started(self.ctx.now()):
                raise SaleAlreadyStarted()
            if vesting_start_time < presale_round.end_time:
                raise VestingBeforeEnd(vesting_start_time=vesting_start_time, end_time=presale_round.end_time)

            previous = presale_round.vesting_start_time
            presale_round.vesting_start_time = vesting_start_time
            await self._updated(presale_round, "VESTING_START", previous, vesting_start_time)

        return presale_round

    async def change_sale_token_address(self, caller: str, round_id: int, token_address: str) -> PresaleRound:
        async with self.ctx.atomic("change_sale_token_address", caller=caller, round_id=round_id):
            self.ctx.require_owner(caller)
            presale_round = await self.ctx.get_round(round_id)

            if is_zero_address(token_address):
                raise ZeroAddress()

            previous = presale_round.sale_token_address
            presale_round.sale_token_address = normalize_address(token_address)
            await self.ctx.events.record(
                EventType.SALE_TOKEN_UPDATED,
                round_id=presale_round.id,
                block_time=self.ctx.now(),
                account=self.ctx.owner,
                data={"previous": previous, "new": presale_round.sale_token_address},
            )

        return presale_round

    async def change_buy_options(
        self,
        caller: str,
        round_id: int,
        enable_buy_with_native: Optional[bool] = None,
        enable_buy_with_stable: Optional[bool] = None,
    ) -> PresaleRound:
        """Toggle the native and stablecoin purchase paths independently"""
        async with self.ctx.atomic("change_buy_options", caller=caller, round_id=round_id):
            self.ctx.require_owner(caller)
            presale_round = await self.ctx.get_round(round_id)

            if enable_buy_with_native is None and enable_buy_with_stable is None:
                raise InvalidParams()

            if enable_buy_with_native is not None and enable_buy_with_native != presale_round.enable_buy_with_native:
                previous = presale_round.enable_buy_with_native
                presale_round.enable_buy_with_native = enable_buy_with_native
                await self._updated(presale_round, "BUY_NATIVE", previous, enable_buy_with_native)
            if enable_buy_with_stable is not None and enable_buy_with_stable != presale_round.enable_buy_with_stable:
                previous = presale_round.enable_buy_with_stable
                presale_round.enable_buy_with_stable = enable_buy_with_stable
                await self._updated(presale_round, "BUY_STABLE", previous, enable_buy_with_stable)

        return presale_round

    async def pause(self, caller: str, round_id: int) -> PresaleRound:
        async with self.ctx.atomic("pause", caller=caller, round_id=round_id):
            self.ctx.require_owner(caller)
            presale_round = await self.ctx.get_round(round_id)

            if presale_round.paused:
                raise AlreadyPaused()

            presale_round.paused = True
            await self.ctx.events.record(
                EventType.ROUND_PAUSED,
                round_id=presale_round.id,
                block_time=self.ctx.now(),
                account=self.ctx.owner,
            )

        return presale_round

    async def unpause(self, caller: str, round_id: int) -> PresaleRound:
        async with self.ctx.atomic("unpause", caller=caller, round_id=round_id):
            self.ctx.require_owner(caller)
            presale_round = await self.ctx.get_round(round_id)

            if not presale_round.paused:
                raise NotPaused()

            presale_round.paused = False
            await self.ctx.events.record(
                EventType.ROUND_UNPAUSED,
                round_id=presale_round.id,
                block_time=self.ctx.now(),
                account=self.ctx.owner,
            )

        return presale_round
