"""Service singletons shared by the routers; tests replace them via dependency_overrides."""

from typing import Annotated

from fastapi import Depends

from app.domain.live.channel.channel_domain import ChannelService
from app.domain.live.dashboard.dashboard_domain import DashboardService
from app.domain.live.event.event_domain import EventService
from app.domain.live.input.input_domain import InputService
from app.services.integrations.s3_storage import S3Service, s3_service

_event_service: EventService | None = None
_dashboard_service: DashboardService | None = None
_input_service: InputService | None = None
_channel_service: ChannelService | None = None


def get_event_service() -> EventService:
    global _event_service
    if _event_service is None:
        _event_service = EventService()
    return _event_service


def get_dashboard_service() -> DashboardService:
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService(events=get_event_service())
    return _dashboard_service


def get_input_service() -> InputService:
    global _input_service
    if _input_service is None:
        _input_service = InputService()
    return _input_service


def get_channel_service() -> ChannelService:
    global _channel_service
    if _channel_service is None:
        _channel_service = ChannelService()
    return _channel_service


def get_s3_service() -> S3Service:
    return s3_service


EventSvc = Annotated[EventService, Depends(get_event_service)]
DashboardSvc = Annotated[DashboardService, Depends(get_dashboard_service)]
InputSvc = Annotated[InputService, Depends(get_input_service)]
ChannelSvc = Annotated[ChannelService, Depends(get_channel_service)]
S3Svc = Annotated[S3Service, Depends(get_s3_service)]
