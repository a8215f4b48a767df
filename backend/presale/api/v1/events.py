"""Event log API endpoints"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from presale.api.deps import get_presale_service
from presale.models.event import EventType
from presale.schemas.event import EventResponse
from presale.services.presale import PresaleService

router = APIRouter()


@router.get("", response_model=List[EventResponse])
async def list_events(
    round_id: Optional[int] = Query(None),
    event_type: Optional[EventType] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    service: PresaleService = Depends(get_presale_service),
):
    """Events in write order, for indexers"""
    events = await service.events.list_events(
        round_id=round_id, event_type=event_type, skip=skip, limit=limit
    )
    return [EventResponse.model_validate(e) for e in events]
