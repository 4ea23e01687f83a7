from fastapi import APIRouter, status

from app.api.v1.dependency import EventSvc
from app.api.v1.schemas.base import ApiOut, error_responses
from app.api.v1.schemas.event import CreateEventIn, EventDetailOut, EventsOut, UpdateEventIn
from app.domain.live.event.event_models import EventCreateParams, EventUpdateParams
from app.schemas.event import EventRecord

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", responses=error_responses(500))
async def list_events(service: EventSvc) -> ApiOut[EventsOut]:
    """Dump the whole ledger."""
    root = await service.list_events()
    return ApiOut[EventsOut](results=EventsOut(events=root.events))


@router.post("/create", status_code=status.HTTP_201_CREATED, responses=error_responses(400, 422, 500))
async def create_event(payload: CreateEventIn, service: EventSvc) -> ApiOut[EventRecord]:
    """Provision input and channel for an event and record it."""
    params = EventCreateParams.model_validate(payload.model_dump())
    record = await service.create_event(params)
    return ApiOut[EventRecord](results=record)


@router.get("/{channel_id}", responses=error_responses(404, 500))
async def get_event(channel_id: str, service: EventSvc) -> ApiOut[EventDetailOut]:
    """Ledger entry enriched with the live channel and input descriptions."""
    details = await service.get_event_details(channel_id)
    return ApiOut[EventDetailOut](
        results=EventDetailOut(event=details.event, channel=details.channel, inputs=details.inputs)
    )


@router.put("/{channel_id}/update", responses=error_responses(400, 404, 422))
async def update_event(channel_id: str, payload: UpdateEventIn, service: EventSvc) -> ApiOut[EventRecord]:
    """Rename an event or move its start; the booking window follows the start."""
    params = EventUpdateParams.model_validate(payload.model_dump(exclude_unset=True))
    record = await service.update_event(channel_id, params)
    return ApiOut[EventRecord](results=record)
