"""Channel domain service - MediaLive channel creation and lifecycle commands."""

from typing import Any

from loguru import logger

from app.app_config import AppEnvironConfig, get_app_environ_config
from app.schemas.event import ChannelClass
from app.services.integrations.aws_catalog_service import AwsCatalogService, aws_catalog_service
from app.services.integrations.medialive_service import MediaLiveService, medialive_service

from ._templates import ChannelTemplateBuilder

DEFAULT_ROLE_NAME = "MediaLiveAccessRole"


class ChannelService:
    def __init__(
        self,
        medialive: MediaLiveService | None = None,
        catalog: AwsCatalogService | None = None,
        templates: ChannelTemplateBuilder | None = None,
        cfg: AppEnvironConfig | None = None,
    ) -> None:
        self._medialive = medialive or medialive_service
        self._catalog = catalog or aws_catalog_service
        self._cfg = cfg or get_app_environ_config()
        self._templates = templates or ChannelTemplateBuilder(self._cfg)

    async def resolve_role_arn(self, region: str) -> str:
        """Configured role, or the account's default MediaLive role."""
        if self._cfg.MEDIALIVE_ROLE_ARN:
            return self._cfg.MEDIALIVE_ROLE_ARN
        account_id = await self._catalog.get_account_id(region)
        role_arn = f"arn:aws:iam::{account_id}:role/{DEFAULT_ROLE_NAME}"
        logger.info(f"MEDIALIVE_ROLE_ARN not set, using {role_arn}")
        return role_arn

    async def create_channel(
        self,
        region: str,
        name: str,
        channel_class: ChannelClass,
        input_id: str,
        output_id: str,
    ) -> dict[str, Any]:
        """Create a channel from the tier template wired to `input_id` and MediaPackage `output_id`."""
        role_arn = await self.resolve_role_arn(region)
        params = self._templates.build(
            channel_class,
            name=name,
            role_arn=role_arn,
            input_id=input_id,
            output_id=output_id,
            tags={"CreatedBy": self._cfg.RESOURCE_TAG_CREATED_BY},
        )
        return await self._medialive.create_channel(region, params)

    async def start_channel(self, region: str, channel_id: str) -> dict[str, Any]:
        result = await self._medialive.start_channel(region, channel_id)
        logger.info(f"Start requested for channel {channel_id} in {region}")
        return result

    async def stop_channel(self, region: str, channel_id: str) -> dict[str, Any]:
        result = await self._medialive.stop_channel(region, channel_id)
        logger.info(f"Stop requested for channel {channel_id} in {region}")
        return result
