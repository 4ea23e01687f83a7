"""
Form endpoints of the control panel.

Each action redirects back to the dashboard with the outcome in the query
string, so failures never surface as raw error pages.
"""

from urllib.parse import urlencode

from fastapi import APIRouter, Form, status
from fastapi.responses import RedirectResponse
from loguru import logger

from app.api.errors import describe_error
from app.api.v1.dependency import ChannelSvc, EventSvc, InputSvc
from app.schemas.event import ChannelClass

router = APIRouter(tags=["Forms"])


def redirect_with_message(region: str, message: str, success: bool) -> RedirectResponse:
    query = urlencode(
        {
            "region": region,
            "message": message,
            "messageStatus": "success" if success else "danger",
        }
    )
    return RedirectResponse(url=f"/?{query}", status_code=status.HTTP_303_SEE_OTHER)


def _failure(region: str, action: str, exc: Exception) -> RedirectResponse:
    logger.error(f"{action} failed in {region}: {exc}")
    return redirect_with_message(region, f"{action} failed: {describe_error(exc)}", success=False)


def _missing(region: str, *fields: tuple[str, str]) -> RedirectResponse | None:
    absent = [wire for wire, value in fields if not value]
    if absent:
        return redirect_with_message(region, f"Missing required fields: {', '.join(absent)}", success=False)
    return None


def _channel_class(value: str) -> ChannelClass:
    try:
        return ChannelClass(value)
    except ValueError:
        raise ValueError(f"Invalid channel class: {value}") from None


# ==================== INPUTS ====================


@router.post("/inputs/create-rtmp")
async def create_rtmp_input(
    service: InputSvc,
    region: str = Form(""),
    input_name: str = Form("", alias="inputName"),
    input_class: str = Form(ChannelClass.STANDARD.value, alias="inputClass"),
    security_group_id: str = Form("", alias="securityGroupId"),
):
    if error := _missing(region, ("region", region), ("inputName", input_name), ("securityGroupId", security_group_id)):
        return error
    try:
        created = await service.create_rtmp_input(region, input_name, _channel_class(input_class), security_group_id)
    except Exception as e:
        return _failure(region, "Creating RTMP input", e)
    return redirect_with_message(region, f"RTMP input '{created.get('Name', input_name)}' created.", success=True)


@router.post("/inputs/create-mp4")
async def create_mp4_input(
    service: InputSvc,
    region: str = Form(""),
    input_name: str = Form("", alias="inputName"),
    input_class: str = Form(ChannelClass.STANDARD.value, alias="inputClass"),
    s3_file_path: str = Form("", alias="s3FilePath"),
):
    if error := _missing(region, ("region", region), ("inputName", input_name), ("s3FilePath", s3_file_path)):
        return error
    try:
        created = await service.create_mp4_input(region, input_name, _channel_class(input_class), s3_file_path)
    except Exception as e:
        return _failure(region, "Creating MP4 input", e)
    return redirect_with_message(region, f"MP4 input '{created.get('Name', input_name)}' created.", success=True)


@router.post("/inputs/create-link")
async def create_link_input(
    service: InputSvc,
    region: str = Form(""),
    input_name: str = Form("", alias="inputName"),
    link_device_id_1: str = Form("", alias="linkDeviceId1"),
    link_device_id_2: str = Form("", alias="linkDeviceId2"),
):
    if error := _missing(region, ("region", region), ("inputName", input_name), ("linkDeviceId1", link_device_id_1)):
        return error
    device_ids = [d for d in (link_device_id_1, link_device_id_2) if d]
    try:
        created = await service.create_link_input(region, input_name, device_ids)
    except Exception as e:
        return _failure(region, "Creating Link input", e)
    return redirect_with_message(region, f"Link input '{created.get('Name', input_name)}' created.", success=True)


@router.post("/inputs/create-mediaconnect")
async def create_mediaconnect_input(
    service: InputSvc,
    region: str = Form(""),
    input_name: str = Form("", alias="inputName"),
    flow_arn_1: str = Form("", alias="flowArn1"),
    flow_arn_2: str = Form("", alias="flowArn2"),
):
    if error := _missing(region, ("region", region), ("inputName", input_name), ("flowArn1", flow_arn_1)):
        return error
    flow_arns = [f for f in (flow_arn_1, flow_arn_2) if f]
    try:
        created = await service.create_mediaconnect_input(region, input_name, flow_arns)
    except Exception as e:
        return _failure(region, "Creating MediaConnect input", e)
    return redirect_with_message(
        region, f"MediaConnect input '{created.get('Name', input_name)}' created.", success=True
    )


@router.post("/inputs/delete")
async def delete_input(
    service: InputSvc,
    region: str = Form(""),
    input_id: str = Form("", alias="inputId"),
):
    if error := _missing(region, ("region", region), ("inputId", input_id)):
        return error
    try:
        await service.delete_input(region, input_id)
    except Exception as e:
        return _failure(region, "Deleting input", e)
    return redirect_with_message(region, f"Input {input_id} deleted.", success=True)


# ==================== CHANNELS ====================


@router.post("/channels/create")
async def create_channel(
    service: ChannelSvc,
    region: str = Form(""),
    channel_name: str = Form("", alias="channelName"),
    channel_class: str = Form(ChannelClass.STANDARD.value, alias="channelClass"),
    input_id: str = Form("", alias="inputId"),
    media_package_channel_id: str = Form("", alias="mediaPackageChannelId"),
):
    if error := _missing(
        region,
        ("region", region),
        ("channelName", channel_name),
        ("inputId", input_id),
        ("mediaPackageChannelId", media_package_channel_id),
    ):
        return error
    try:
        created = await service.create_channel(
            region, channel_name, _channel_class(channel_class), input_id, media_package_channel_id
        )
    except Exception as e:
        return _failure(region, "Creating channel", e)
    return redirect_with_message(region, f"Channel '{created.get('Name', channel_name)}' created.", success=True)


@router.post("/channels/start")
async def start_channel(
    service: ChannelSvc,
    region: str = Form(""),
    channel_id: str = Form("", alias="channelId"),
):
    if error := _missing(region, ("region", region), ("channelId", channel_id)):
        return error
    try:
        await service.start_channel(region, channel_id)
    except Exception as e:
        return _failure(region, "Starting channel", e)
    return redirect_with_message(region, f"Channel {channel_id} is starting.", success=True)


@router.post("/channels/stop")
async def stop_channel(
    service: ChannelSvc,
    region: str = Form(""),
    channel_id: str = Form("", alias="channelId"),
):
    if error := _missing(region, ("region", region), ("channelId", channel_id)):
        return error
    try:
        await service.stop_channel(region, channel_id)
    except Exception as e:
        return _failure(region, "Stopping channel", e)
    return redirect_with_message(region, f"Channel {channel_id} is stopping.", success=True)


@router.post("/channels/delete")
async def delete_channel(
    service: EventSvc,
    region: str = Form(""),
    channel_id: str = Form("", alias="channelId"),
):
    """Delete the channel together with its inputs and ledger entry."""
    if error := _missing(region, ("region", region), ("channelId", channel_id)):
        return error
    try:
        result = await service.destroy_event(region, channel_id)
    except Exception as e:
        return _failure(region, "Deleting channel", e)

    if result.failed_input_ids:
        return redirect_with_message(
            region,
            f"Channel {channel_id} deleted, but inputs could not be removed: {', '.join(result.failed_input_ids)}",
            success=False,
        )
    return redirect_with_message(region, f"Channel {channel_id} and its inputs deleted.", success=True)
