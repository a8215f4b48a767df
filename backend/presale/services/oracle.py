"""Price oracle clients for native-currency conversion"""
from typing import Optional, Protocol, Tuple

import httpx
import structlog

from presale.config import get_settings
from presale.services.errors import OracleError

logger = structlog.get_logger()


class RateOracle(Protocol):
    """Reference-currency units per one native-currency unit."""

    async def latest_rate(self) -> Tuple[int, int]:
        """Return (rate, decimals) as reported by the feed."""
        ...


class StaticRateOracle:
    """Oracle that always reports the same rate (local runs and tests)"""

    def __init__(self, rate: int, decimals: int = 8):
        self.rate = rate
        self.decimals = decimals

    async def latest_rate(self) -> Tuple[int, int]:
        return self.rate, self.decimals


class HttpRateOracle:
    """Async HTTP price feed client.

    The feed answers GET requests with `{"rate": "<int>", "decimals": <int>}`.
    Nothing is cached between calls; every quote hits the feed.
    """

    def __init__(self, url: str, timeout: float = 5.0, client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self.timeout = timeout
        self._client = client

    async def connect(self) -> None:
        """Open the underlying HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            logger.info("Connected to rate oracle", url=self.url)

    async def disconnect(self) -> None:
        """Close the underlying HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from rate oracle")

    async def latest_rate(self) -> Tuple[int, int]:
        await self.connect()
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            payload = response.json()
            return int(payload["rate"]), int(payload["decimals"])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error("Oracle request failed", url=self.url, error=str(e))
            raise OracleError(f"Oracle request failed: {e}") from e


def build_oracle() -> RateOracle:
    """Build the oracle configured in settings"""
    settings = get_settings()
    if settings.oracle_mode == "http":
        return HttpRateOracle(settings.oracle_url, timeout=settings.oracle_timeout_seconds)
    return StaticRateOracle(settings.oracle_static_rate, settings.oracle_static_decimals)


# Singleton instance
_oracle: Optional[RateOracle] = None


def get_oracle() -> RateOracle:
    """Get or create the oracle singleton"""
    global _oracle
    if _oracle is None:
        _oracle = build_oracle()
    return _oracle


async def close_oracle() -> None:
    """Close the oracle singleton"""
    global _oracle
    if isinstance(_oracle, HttpRateOracle):
        await _oracle.disconnect()
    _oracle = None
