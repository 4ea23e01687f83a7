"""Tests for channel template loading and the channel service."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import orjson
import pytest

from app.app_config import AppEnvironConfig
from app.domain.live.channel._templates import ChannelTemplateBuilder
from app.domain.live.channel.channel_domain import ChannelService
from app.schemas.event import ChannelClass
from app.services.integrations.aws_catalog_service import AwsCatalogService
from app.services.integrations.medialive_service import MediaLiveService
from app.utils.app_errors import AppError, AppErrorCode


class TestChannelTemplateBuilder:
    @pytest.mark.parametrize("channel_class", list(ChannelClass))
    def test_build_fills_placeholders(self, channel_class: ChannelClass):
        builder = ChannelTemplateBuilder(AppEnvironConfig())

        params = builder.build(
            channel_class,
            name="show_channel",
            role_arn="arn:aws:iam::1:role/MediaLiveAccessRole",
            input_id="in-1",
            output_id="mp-1",
            tags={"CreatedBy": "live-event-panel"},
        )

        assert params["Name"] == "show_channel"
        assert params["RoleArn"] == "arn:aws:iam::1:role/MediaLiveAccessRole"
        assert params["ChannelClass"] == channel_class.value
        assert params["InputAttachments"][0]["InputId"] == "in-1"
        assert params["Destinations"][0]["MediaPackageSettings"][0]["ChannelId"] == "mp-1"
        assert params["EncoderSettings"]["OutputGroups"][0]["Name"] == "mp-1"
        assert params["Tags"] == {"CreatedBy": "live-event-panel"}
        # untouched template content passes through
        assert params["EncoderSettings"]["VideoDescriptions"]
        assert params["InputAttachments"][0]["InputSettings"]["SourceEndBehavior"] == "LOOP"

    def test_missing_template_file(self, tmp_path: Path):
        cfg = AppEnvironConfig(CHANNEL_TEMPLATE_SINGLE=str(tmp_path / "absent.json"))

        with pytest.raises(AppError) as exc_info:
            ChannelTemplateBuilder(cfg).load(ChannelClass.SINGLE_PIPELINE)

        assert exc_info.value.errcode == AppErrorCode.E_CONFIG_MISSING.value
        assert exc_info.value.status_code == 500

    def test_template_without_mediapackage_destination(self, tmp_path: Path):
        path = tmp_path / "template.json"
        path.write_bytes(
            orjson.dumps(
                {
                    "ChannelClass": "STANDARD",
                    "InputAttachments": [{"InputId": ""}],
                    "Destinations": [{"Id": "rtmp", "Settings": [{"Url": "rtmp://x"}]}],
                    "EncoderSettings": {"OutputGroups": [{"Name": ""}]},
                }
            )
        )
        cfg = AppEnvironConfig(CHANNEL_TEMPLATE_STANDARD=str(path))

        with pytest.raises(AppError, match="MediaPackage"):
            ChannelTemplateBuilder(cfg).load(ChannelClass.STANDARD)


class TestChannelService:
    async def test_role_arn_falls_back_to_account_default(self):
        catalog = AsyncMock(spec=AwsCatalogService)
        catalog.get_account_id.return_value = "123456789012"
        service = ChannelService(
            medialive=AsyncMock(spec=MediaLiveService),
            catalog=catalog,
            cfg=AppEnvironConfig(MEDIALIVE_ROLE_ARN=None),
        )

        role_arn = await service.resolve_role_arn("eu-west-1")

        assert role_arn == "arn:aws:iam::123456789012:role/MediaLiveAccessRole"

    async def test_create_channel_sends_built_template(self):
        medialive = AsyncMock(spec=MediaLiveService)
        medialive.create_channel.return_value = {"Id": "ch-1"}
        templates = MagicMock(spec=ChannelTemplateBuilder)
        templates.build.return_value = {"Name": "show_channel"}
        cfg = AppEnvironConfig(MEDIALIVE_ROLE_ARN="arn:role")
        service = ChannelService(
            medialive=medialive,
            catalog=AsyncMock(spec=AwsCatalogService),
            templates=templates,
            cfg=cfg,
        )

        channel = await service.create_channel("eu-west-1", "show_channel", ChannelClass.STANDARD, "in-1", "mp-1")

        assert channel == {"Id": "ch-1"}
        templates.build.assert_called_once_with(
            ChannelClass.STANDARD,
            name="show_channel",
            role_arn="arn:role",
            input_id="in-1",
            output_id="mp-1",
            tags={"CreatedBy": "live-event-panel"},
        )
        medialive.create_channel.assert_awaited_once_with("eu-west-1", {"Name": "show_channel"})
