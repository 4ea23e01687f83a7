"""Channel readiness polling and event detail lookup."""

import asyncio
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from app.app_config import AppEnvironConfig, get_app_environ_config
from app.services.integrations.aws_session import client_error_message, is_not_found
from app.services.integrations.medialive_service import MediaLiveService
from app.shared.retry import retry_async
from app.shared.storage.ledger import LedgerStore
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .event_models import EventDetailResponse


class ReadinessOperations:
    """Describes freshly created channels, tolerating MediaLive's read-after-write lag."""

    def __init__(
        self,
        store: LedgerStore,
        medialive: MediaLiveService,
        cfg: AppEnvironConfig | None = None,
    ) -> None:
        self._store = store
        self._medialive = medialive
        self._cfg = cfg or get_app_environ_config()

    async def describe_with_retry(
        self,
        region: str,
        channel_id: str,
        max_attempts: int | None = None,
        delay_ms: int | None = None,
    ) -> dict[str, Any]:
        """
        Describe a channel, retrying while MediaLive reports it as not found.

        Raises:
            AppError: E_CHANNEL_NOT_READY when attempts run out or AWS fails otherwise
        """
        attempts = max_attempts if max_attempts is not None else self._cfg.DESCRIBE_MAX_ATTEMPTS
        delay = delay_ms if delay_ms is not None else self._cfg.DESCRIBE_RETRY_DELAY_MS

        try:
            return await retry_async(
                lambda: self._medialive.describe_channel(region, channel_id),
                max_attempts=attempts,
                delay_seconds=delay / 1000,
                retry_if=is_not_found,
                label=f"describe channel {channel_id}",
            )
        except (ClientError, BotoCoreError) as e:
            raise AppError(
                errcode=AppErrorCode.E_CHANNEL_NOT_READY,
                errmesg=f"Could not retrieve channel details. Verify the resource exists in region {region}.",
                status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
            ) from e

    async def get_event_details(self, channel_id: str) -> EventDetailResponse:
        """Ledger entry plus live channel and input descriptions.

        Inputs are described concurrently; a single failure fails the whole lookup.
        """
        record = await self._store.get_event(channel_id)
        if record is None:
            raise AppError(
                errcode=AppErrorCode.E_EVENT_NOT_FOUND,
                errmesg=f"Event not found: {channel_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )

        channel = await self.describe_with_retry(record.region, channel_id)

        try:
            inputs = await asyncio.gather(
                *(self._medialive.describe_input(record.region, input_id) for input_id in record.input_ids)
            )
        except ClientError as e:
            logger.error(f"Input details for event {channel_id} unavailable: {e}")
            raise AppError(
                errcode=AppErrorCode.E_PROVIDER_ERROR,
                errmesg=f"Could not retrieve input details: {client_error_message(e)}",
                status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
            ) from e

        return EventDetailResponse(event=record, channel=channel, inputs=list(inputs))
