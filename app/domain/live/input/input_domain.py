"""Input domain service - direct input management and per-kind creation."""

from typing import Any

from loguru import logger

from app.app_config import AppEnvironConfig, get_app_environ_config
from app.schemas.event import ChannelClass, InputType
from app.services.integrations.medialive_service import MediaLiveService, medialive_service
from app.services.integrations.s3_storage import S3Service, s3_service

from ._strategies import (
    InputDeviceStrategy,
    InputSource,
    InputStrategy,
    MediaConnectStrategy,
    Mp4FileStrategy,
    RtmpPushStrategy,
    link_input_request,
    mediaconnect_input_request,
    mp4_input_request,
    rtmp_input_request,
)


class InputService:
    """Creates and deletes MediaLive inputs."""

    def __init__(
        self,
        medialive: MediaLiveService | None = None,
        s3: S3Service | None = None,
        cfg: AppEnvironConfig | None = None,
    ) -> None:
        self._medialive = medialive or medialive_service
        self._s3 = s3 or s3_service
        self._cfg = cfg or get_app_environ_config()
        self._strategies: dict[InputType, InputStrategy] = {
            InputType.RTMP_PUSH: RtmpPushStrategy(self._medialive),
            InputType.MP4_FILE: Mp4FileStrategy(self._s3),
            InputType.INPUT_DEVICE: InputDeviceStrategy(),
            InputType.MEDIACONNECT: MediaConnectStrategy(),
        }

    def strategy_for(self, input_type: InputType) -> InputStrategy:
        return self._strategies[input_type]

    async def resolve_request(
        self,
        region: str,
        input_type: InputType,
        name: str,
        channel_class: ChannelClass,
        source: InputSource,
    ) -> dict[str, Any]:
        """Validate the source fields and build the CreateInput request without creating anything."""
        return await self.strategy_for(input_type).build_request(region, name, channel_class, source)

    async def create_input(self, region: str, request: dict[str, Any]) -> dict[str, Any]:
        params = {**request, "Tags": {"CreatedBy": self._cfg.RESOURCE_TAG_CREATED_BY}}
        return await self._medialive.create_input(region, params)

    async def delete_input(self, region: str, input_id: str) -> None:
        await self._medialive.delete_input(region, input_id)
        logger.info(f"Deleted input {input_id} in {region}")

    # ==================== DIRECT CREATION ====================

    async def create_rtmp_input(
        self,
        region: str,
        name: str,
        input_class: ChannelClass,
        security_group_id: str,
    ) -> dict[str, Any]:
        return await self.create_input(region, rtmp_input_request(name, input_class, security_group_id))

    async def create_mp4_input(
        self,
        region: str,
        name: str,
        input_class: ChannelClass,
        s3_file_path: str,
    ) -> dict[str, Any]:
        url = self._s3.get_asset_url(s3_file_path)
        return await self.create_input(region, mp4_input_request(name, [url] * input_class.pipelines))

    async def create_link_input(self, region: str, name: str, device_ids: list[str]) -> dict[str, Any]:
        return await self.create_input(region, link_input_request(name, device_ids))

    async def create_mediaconnect_input(self, region: str, name: str, flow_arns: list[str]) -> dict[str, Any]:
        return await self.create_input(region, mediaconnect_input_request(name, flow_arns))
