"""Event recorder for presale state transitions."""
from typing import Any, Dict, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from presale.models.event import PresaleEvent, EventType

logger = structlog.get_logger()


class EventRecorder:
    """Writes presale events into the operation's session and logs them."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        event_type: EventType,
        round_id: int,
        block_time: int,
        account: Optional[str] = None,
        amount: Optional[int] = None,
        key: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> PresaleEvent:
        """
        Record an event in the presale event log.

        Args:
            event_type: The kind of transition (from EventType enum)
            round_id: Round the transition belongs to
            block_time: Unix time of the operation
            account: Buyer, claimant or owner involved
            amount: Token amount bought or claimed
            key: Field name for ROUND_UPDATED events
            data: Additional type-specific values; large integers are stored as strings

        Returns:
            The created PresaleEvent row
        """
        event = PresaleEvent(
            round_id=round_id,
            event_type=event_type,
            block_time=block_time,
            account=account,
            amount=amount,
            key=key,
            data=data,
        )
        self.db.add(event)
        await self.db.flush()

        logger.info(
            "Recorded presale event",
            event_id=event.id,
            event_type=event_type.value,
            round_id=round_id,
            account=account,
            amount=amount,
            key=key,
        )

        return event

    async def list_events(
        self,
        round_id: Optional[int] = None,
        event_type: Optional[EventType] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[PresaleEvent]:
        """Events in the order they were written, optionally filtered"""
        query = select(PresaleEvent)
        if round_id is not None:
            query = query.where(PresaleEvent.round_id == round_id)
        if event_type is not None:
            query = query.where(PresaleEvent.event_type == event_type)
        query = query.order_by(PresaleEvent.id).offset(skip).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())
