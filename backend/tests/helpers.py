"""Shared constants and helpers for presale tests"""
from sqlalchemy.ext.asyncio import AsyncSession

from presale.config import get_settings
from presale.models import MONTH
from presale.services.ledger import SqlLedger

settings = get_settings()

OWNER = settings.owner_address.lower()
HOLDER = settings.presale_address.lower()
ALICE = "0xa11ce00000000000000000000000000000000001"
BOB = "0xb0b0000000000000000000000000000000000002"
CAROL = "0xca20100000000000000000000000000000000003"
SALE_TOKEN = "0x5a1e000000000000000000000000000000000005"

GENESIS = 1_700_000_000
PRICE = 60_000_000_000_000_000  # 0.06 USD
UPDATED_PRICE = 50_000_000_000_000_000  # 0.05 USD
ONE_TOKEN = 10**18

# Cost of 10 tokens at 0.05 USD with ETH at 1880 USD
TEN_TOKENS_IN_WEI = 265957446808510


class MutableClock:
    """Clock the tests move by hand"""

    def __init__(self, now: int):
        self._now = now

    def now(self) -> int:
        return self._now

    def set(self, now: int) -> None:
        self._now = now

    def advance(self, seconds: int) -> None:
        self._now += seconds


def round_params(now: int, **overrides) -> dict:
    """Round opening in 60s for 300s, vesting 60s after close, 1 month cliff, 2 month period"""
    params = dict(
        start_time=now + 60,
        end_time=now + 360,
        price=PRICE,
        tokens_to_sell=100000,
        base_decimals=ONE_TOKEN,
        vesting_start_time=now + 420,
        vesting_cliff=MONTH,
        vesting_period=2 * MONTH,
    )
    params.update(overrides)
    return params


async def fund(db: AsyncSession, ledger: str, account: str, amount: int) -> None:
    await SqlLedger(db, ledger, HOLDER).mint(account, amount)
    await db.commit()


async def approve_stable(db: AsyncSession, owner: str, amount: int) -> None:
    await SqlLedger(db, settings.stable_ledger, HOLDER).approve(owner, HOLDER, amount)
    await db.commit()


async def balance(db: AsyncSession, ledger: str, account: str) -> int:
    return await SqlLedger(db, ledger, HOLDER).balance_of(account)


# Timeline of the round built by round_params(GENESIS)
SALE_START = GENESIS + 60
SALE_END = GENESIS + 360
VESTING_START = GENESIS + 420
CLAIM_START = VESTING_START + MONTH
CLAIM_END = CLAIM_START + 2 * MONTH
