"""
Pricing Engine

Converts a token quantity into the payment owed, in stablecoin or native-currency
smallest units. All arithmetic is on integers, multiplying before dividing.
"""
from presale.models.vesting import BASE_MULTIPLIER
from presale.services.context import PresaleContext
from presale.services.errors import OracleError

PRICE_DECIMALS = 18


def normalize_rate(rate: int, decimals: int) -> int:
    """Rescale an oracle answer to 18-decimal fixed point"""
    if decimals < 0:
        raise OracleError(f"Invalid oracle decimals {decimals}")
    if decimals <= PRICE_DECIMALS:
        return rate * 10 ** (PRICE_DECIMALS - decimals)
    return rate // 10 ** (decimals - PRICE_DECIMALS)


def stable_cost(token_amount: int, price: int, stable_decimals: int) -> int:
    """Stablecoin owed for `token_amount` whole tokens at an 18-decimal `price`"""
    if stable_decimals > PRICE_DECIMALS:
        return token_amount * price * 10 ** (stable_decimals - PRICE_DECIMALS)
    return (token_amount * price) // 10 ** (PRICE_DECIMALS - stable_decimals)


def native_cost(token_amount: int, price: int, rate: int) -> int:
    """Native currency (18 decimals) owed, given an 18-decimal reference rate"""
    usd_value = token_amount * price
    return (usd_value * BASE_MULTIPLIER) // rate


class PricingEngine:
    """Quotes against the stored round price and the live oracle rate."""

    def __init__(self, ctx: PresaleContext):
        self.ctx = ctx

    async def latest_rate(self) -> int:
        """Fresh oracle rate, 18 decimals. Never cached."""
        try:
            rate, decimals = await self.ctx.oracle.latest_rate()
        except OracleError:
            raise
        except Exception as e:
            raise OracleError(f"Oracle call failed: {e}") from e

        normalized = normalize_rate(rate, decimals)
        if normalized <= 0:
            raise OracleError(rate=rate, decimals=decimals)
        return normalized

    async def quote_for_stable(self, round_id: int, token_amount: int) -> int:
        presale_round = await self.ctx.get_round(round_id)
        return stable_cost(token_amount, presale_round.price, self.ctx.settings.stable_decimals)

    async def quote_for_native(self, round_id: int, token_amount: int) -> int:
        presale_round = await self.ctx.get_round(round_id)
        rate = await self.latest_rate()
        return native_cost(token_amount, presale_round.price, rate)
