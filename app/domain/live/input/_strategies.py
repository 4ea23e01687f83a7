"""Input creation strategies, one per MediaLive input kind.

Each strategy validates the kind-specific source fields and resolves the full
CreateInput request. Resolution may read from AWS (security groups) but never
writes, so a rejected request leaves no remote side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.schemas.event import ChannelClass, InputType
from app.services.integrations.medialive_service import MediaLiveService
from app.services.integrations.s3_storage import S3Service
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


@dataclass(frozen=True)
class InputSource:
    """Kind-specific source fields from a creation request."""

    source_id: str | None = None
    source_id_1: str | None = None
    source_id_2: str | None = None


def _missing(field: str, what: str) -> AppError:
    return AppError(
        errcode=AppErrorCode.E_INVALID_REQUEST,
        errmesg=f"Missing required field: {field} ({what})",
        status_code=HttpStatusCode.BAD_REQUEST,
    )


class InputStrategy:
    input_type: InputType

    async def build_request(
        self,
        region: str,
        name: str,
        channel_class: ChannelClass,
        source: InputSource,
    ) -> dict[str, Any]:
        raise NotImplementedError


class RtmpPushStrategy(InputStrategy):
    input_type = InputType.RTMP_PUSH

    def __init__(self, medialive: MediaLiveService) -> None:
        self._medialive = medialive

    async def build_request(self, region, name, channel_class, source):
        groups = await self._medialive.list_input_security_groups(region)
        if not groups:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg=f"No input security group exists in region {region}; create one before adding an RTMP input",
                status_code=HttpStatusCode.BAD_REQUEST,
            )
        return rtmp_input_request(name, channel_class, groups[0]["Id"])


class Mp4FileStrategy(InputStrategy):
    input_type = InputType.MP4_FILE

    def __init__(self, s3: S3Service) -> None:
        self._s3 = s3

    async def build_request(self, region, name, channel_class, source):
        if not source.source_id:
            raise _missing("sourceId", "S3 key of the MP4 asset")
        url = self._s3.get_asset_url(source.source_id)
        return mp4_input_request(name, [url] * channel_class.pipelines)


class InputDeviceStrategy(InputStrategy):
    input_type = InputType.INPUT_DEVICE

    async def build_request(self, region, name, channel_class, source):
        return link_input_request(name, _pipeline_sources(channel_class, source, "Link device"))


class MediaConnectStrategy(InputStrategy):
    input_type = InputType.MEDIACONNECT

    async def build_request(self, region, name, channel_class, source):
        return mediaconnect_input_request(name, _pipeline_sources(channel_class, source, "MediaConnect flow"))


def _pipeline_sources(channel_class: ChannelClass, source: InputSource, what: str) -> list[str]:
    """One source per pipeline; the second is required only for STANDARD channels."""
    if not source.source_id_1:
        raise _missing("sourceId1", f"{what} for pipeline 0")
    sources = [source.source_id_1]
    if channel_class is ChannelClass.STANDARD:
        if not source.source_id_2:
            raise _missing("sourceId2", f"{what} for pipeline 1, required by STANDARD channels")
        sources.append(source.source_id_2)
    return sources


# ==================== REQUEST BUILDERS ====================


def rtmp_input_request(name: str, channel_class: ChannelClass, security_group_id: str) -> dict[str, Any]:
    destinations = [{"StreamName": f"{name}/a"}]
    if channel_class is ChannelClass.STANDARD:
        destinations.append({"StreamName": f"{name}/b"})
    return {
        "Name": name,
        "Type": InputType.RTMP_PUSH.value,
        "Destinations": destinations,
        "InputSecurityGroups": [security_group_id],
    }


def mp4_input_request(name: str, urls: list[str]) -> dict[str, Any]:
    return {
        "Name": name,
        "Type": InputType.MP4_FILE.value,
        "Sources": [{"Url": url} for url in urls],
    }


def link_input_request(name: str, device_ids: list[str]) -> dict[str, Any]:
    return {
        "Name": name,
        "Type": InputType.INPUT_DEVICE.value,
        "InputDevices": [{"Id": device_id} for device_id in device_ids],
    }


def mediaconnect_input_request(name: str, flow_arns: list[str]) -> dict[str, Any]:
    return {
        "Name": name,
        "Type": InputType.MEDIACONNECT.value,
        "MediaConnectFlows": [{"FlowArn": arn} for arn in flow_arns],
    }
