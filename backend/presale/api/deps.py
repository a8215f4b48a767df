"""Request-scoped dependencies"""
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from presale.config import get_settings
from presale.models.database import get_db
from presale.services.clock import Clock, SystemClock
from presale.services.context import PresaleContext
from presale.services.oracle import RateOracle, get_oracle
from presale.services.presale import PresaleService


def get_clock() -> Clock:
    return SystemClock()


def get_rate_oracle() -> RateOracle:
    return get_oracle()


async def get_presale_service(
    db: AsyncSession = Depends(get_db),
    oracle: RateOracle = Depends(get_rate_oracle),
    clock: Clock = Depends(get_clock),
) -> PresaleService:
    """Presale service bound to this request's session"""
    ctx = PresaleContext(db=db, oracle=oracle, clock=clock, settings=get_settings())
    return PresaleService(ctx)


CALLER_HEADER_DESCRIPTION = (
    "Address of the caller. Not authenticated: any client can claim any address, "
    "including the owner. Suitable for simulation and trusted networks only."
)


def get_caller(
    x_caller_address: str = Header(..., alias="X-Caller-Address", description=CALLER_HEADER_DESCRIPTION),
) -> str:
    """Address of the principal making the request.

    The header is taken at face value. Deployments exposing owner routes must put
    an authenticating proxy in front that sets it.
    """
    return x_caller_address
