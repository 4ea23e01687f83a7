"""Typed channel configuration built from per-tier JSON templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_pascal

from app.app_config import AppEnvironConfig, get_app_environ_config
from app.schemas.event import ChannelClass
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


class _ApiDocument(BaseModel):
    """Fragment of a MediaLive request; unknown keys pass through untouched."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="allow")


class MediaPackageOutputDestination(_ApiDocument):
    channel_id: str = ""


class OutputDestination(_ApiDocument):
    id: str
    media_package_settings: list[MediaPackageOutputDestination] | None = None


class InputAttachment(_ApiDocument):
    input_id: str = ""
    input_attachment_name: str | None = None


class OutputGroup(_ApiDocument):
    name: str = ""


class EncoderSettings(_ApiDocument):
    output_groups: list[OutputGroup] = Field(min_length=1)


class ChannelTemplate(_ApiDocument):
    name: str = ""
    role_arn: str = ""
    channel_class: ChannelClass
    input_attachments: list[InputAttachment] = Field(min_length=1)
    destinations: list[OutputDestination] = Field(min_length=1)
    encoder_settings: EncoderSettings
    tags: dict[str, str] = Field(default_factory=dict)


class ChannelTemplateBuilder:
    """Turns the template of a redundancy tier into a CreateChannel request."""

    def __init__(self, cfg: AppEnvironConfig | None = None) -> None:
        self._cfg = cfg or get_app_environ_config()

    def template_path(self, channel_class: ChannelClass) -> Path:
        if channel_class is ChannelClass.STANDARD:
            return Path(self._cfg.CHANNEL_TEMPLATE_STANDARD)
        return Path(self._cfg.CHANNEL_TEMPLATE_SINGLE)

    def load(self, channel_class: ChannelClass) -> ChannelTemplate:
        path = self.template_path(channel_class)
        try:
            data = orjson.loads(path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as e:
            logger.error(f"Cannot read channel template {path}: {e}")
            raise AppError(
                errcode=AppErrorCode.E_CONFIG_MISSING,
                errmesg=f"Channel template {path.name} cannot be read",
                status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
            ) from e

        try:
            template = ChannelTemplate.model_validate(data)
        except ValidationError as e:
            logger.error(f"Channel template {path} has an invalid shape: {e.errors(include_url=False)}")
            raise AppError(
                errcode=AppErrorCode.E_CONFIG_MISSING,
                errmesg=f"Channel template {path.name} has an invalid shape",
                status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
            ) from e

        if not template.destinations[0].media_package_settings:
            raise AppError(
                errcode=AppErrorCode.E_CONFIG_MISSING,
                errmesg="The channel template is not configured for a MediaPackage output",
                status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
            )
        return template

    def build(
        self,
        channel_class: ChannelClass,
        *,
        name: str,
        role_arn: str,
        input_id: str,
        output_id: str,
        tags: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        template = self.load(channel_class)

        template.name = name
        template.role_arn = role_arn
        template.channel_class = channel_class
        template.input_attachments[0].input_id = input_id
        template.destinations[0].media_package_settings[0].channel_id = output_id  # type: ignore[index]
        template.encoder_settings.output_groups[0].name = output_id
        if tags:
            template.tags.update(tags)

        return template.model_dump(mode="json", by_alias=True, exclude_none=True)
