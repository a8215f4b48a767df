"""Event log schemas"""
from typing import Any, Dict, Optional
from pydantic import BaseModel

from presale.models.event import EventType


class EventResponse(BaseModel):
    id: int
    round_id: int
    event_type: EventType
    block_time: int
    account: Optional[str] = None
    amount: Optional[int] = None
    key: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True
