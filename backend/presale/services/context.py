"""Shared state and guards for the presale state machine"""
import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Optional

import structlog
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from presale.config import Settings, get_settings
from presale.models.round import PresaleRound
from presale.services.clock import Clock, SystemClock
from presale.services.errors import PresaleError, InvalidId, NotOwner
from presale.services.events import EventRecorder
from presale.services.ledger import Ledger, SqlLedger
from presale.services.oracle import RateOracle

logger = structlog.get_logger()

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(address: str) -> str:
    """Addresses compare case-insensitively"""
    return address.strip().lower()


def is_zero_address(address: Optional[str]) -> bool:
    if not address:
        return True
    digits = normalize_address(address)
    if digits.startswith("0x"):
        digits = digits[2:]
    return digits.strip("0") == ""


# All mutations in the process run one at a time
_state_lock: Optional[asyncio.Lock] = None


def get_state_lock() -> asyncio.Lock:
    """Get or create the process-wide state lock"""
    global _state_lock
    if _state_lock is None:
        _state_lock = asyncio.Lock()
    return _state_lock


@dataclass
class PresaleContext:
    """Everything one presale operation touches.

    `ledger_for` maps a ledger name (stablecoin, native currency or a round's sale
    token address) to a client bound to the presale's custody account.
    """
    db: AsyncSession
    oracle: RateOracle
    clock: Clock = field(default_factory=SystemClock)
    settings: Settings = field(default_factory=get_settings)
    ledger_for: Optional[Callable[[str], Ledger]] = None
    lock: Optional[asyncio.Lock] = None

    def __post_init__(self):
        if self.ledger_for is None:
            self.ledger_for = lambda name: SqlLedger(self.db, name, self.holder)
        if self.lock is None:
            self.lock = get_state_lock()
        self.events = EventRecorder(self.db)
        self._in_transition = False

    @property
    def owner(self) -> str:
        return normalize_address(self.settings.owner_address)

    @property
    def holder(self) -> str:
        return normalize_address(self.settings.presale_address)

    def now(self) -> int:
        return self.clock.now()

    def stable_ledger(self) -> Ledger:
        return self.ledger_for(self.settings.stable_ledger)

    def native_ledger(self) -> Ledger:
        return self.ledger_for(self.settings.native_ledger)

    def sale_token_ledger(self, token_address: str) -> Ledger:
        return self.ledger_for(normalize_address(token_address))

    def require_owner(self, caller: str) -> None:
        if normalize_address(caller) != self.owner:
            raise NotOwner(caller=caller)

    def lock_rows(self, query: Select) -> Select:
        """Add FOR UPDATE to a state read made inside atomic()"""
        if self._in_transition:
            return query.with_for_update().execution_options(populate_existing=True)
        return query

    async def get_round(self, round_id: int) -> PresaleRound:
        """Load a round or fail with InvalidId"""
        if round_id is None or round_id <= 0:
            raise InvalidId(round_id=round_id)
        result = await self.db.execute(
            self.lock_rows(select(PresaleRound).where(PresaleRound.id == round_id))
        )
        presale_round = result.scalar_one_or_none()
        if presale_round is None:
            raise InvalidId(round_id=round_id)
        return presale_round

    @asynccontextmanager
    async def atomic(self, operation: str, **log_context) -> AsyncIterator[None]:
        """Run one state transition serialized and all-or-nothing.

        Commits on success. On any exception every write made inside the block,
        ledger movements and events included, is rolled back before re-raising.
        The asyncio lock orders operations within this process; rounds and vesting
        records read inside the block are locked FOR UPDATE so the database orders
        them across processes sharing it.
        """
        async with self.lock:
            self._in_transition = True
            try:
                yield
                await self.db.commit()
            except PresaleError as e:
                await self.db.rollback()
                logger.warning(
                    "Presale operation rejected",
                    operation=operation,
                    error=e.code,
                    detail=e.detail,
                    **log_context,
                )
                raise
            except Exception as e:
                await self.db.rollback()
                logger.error(
                    "Presale operation failed",
                    operation=operation,
                    error=str(e),
                    **log_context,
                )
                raise
            finally:
                self._in_transition = False
