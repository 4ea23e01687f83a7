from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from app.api.pages.render import render_config_error, render_dashboard
from app.api.v1.dependency import DashboardSvc, EventSvc
from app.app_config import get_app_environ_config

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse)
async def dashboard(
    dashboard_service: DashboardSvc,
    event_service: EventSvc,
    region: str | None = Query(None),
    message: str | None = Query(None),
    message_status: str | None = Query(None, alias="messageStatus"),
):
    region = region or get_app_environ_config().AWS_REGION
    if not region:
        return HTMLResponse(
            render_config_error(
                "No region selected and AWS_REGION is not configured.",
                message=message,
                message_status=message_status,
            )
        )

    view = await dashboard_service.load_dashboard(region)
    root = await event_service.list_events()
    events = sorted(
        (e for e in root.events.values() if e.region == region),
        key=lambda e: e.lifetime.start,
    )
    return HTMLResponse(render_dashboard(view, events, message=message, message_status=message_status))
