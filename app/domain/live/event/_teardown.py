"""Event teardown: channel, attached inputs, ledger entry."""

from botocore.exceptions import ClientError
from loguru import logger

from app.domain.live.input.input_domain import InputService
from app.services.integrations.aws_session import client_error_message
from app.services.integrations.medialive_service import MediaLiveService
from app.shared.retry import retry_async
from app.shared.storage.ledger import LedgerStore

from .event_models import TeardownResult

# MediaLive refuses to delete an input while its channel is still being deleted
_INPUT_IN_USE_CODES = {"ConflictException", "UnprocessableEntityException"}


def _input_in_use(exc: BaseException) -> bool:
    return isinstance(exc, ClientError) and exc.response.get("Error", {}).get("Code") in _INPUT_IN_USE_CODES


class TeardownOperations:
    def __init__(
        self,
        store: LedgerStore,
        medialive: MediaLiveService,
        inputs: InputService,
        input_delete_attempts: int = 3,
        input_delete_delay_seconds: float = 2.0,
    ) -> None:
        self._store = store
        self._medialive = medialive
        self._inputs = inputs
        self._input_delete_attempts = input_delete_attempts
        self._input_delete_delay_seconds = input_delete_delay_seconds

    async def destroy(self, region: str, channel_id: str) -> TeardownResult:
        """
        Delete a channel, then its inputs, then its ledger entry.

        The ledger decides the region when it knows the channel; untracked
        channels use the caller's region and the inputs attached at deletion time.
        Input failures are logged and do not fail the teardown.

        Raises:
            ClientError: If the channel itself cannot be deleted
        """
        record = await self._store.get_event(channel_id)
        if record is not None:
            region = record.region
            input_ids = list(record.input_ids)
        else:
            input_ids = await self._attached_input_ids(region, channel_id)

        await self._medialive.delete_channel(region, channel_id)
        logger.info(f"Deleted channel {channel_id} in {region}")

        result = TeardownResult(channel_id=channel_id, region=region)
        for input_id in input_ids:
            try:
                await retry_async(
                    lambda input_id=input_id: self._inputs.delete_input(region, input_id),
                    max_attempts=self._input_delete_attempts,
                    delay_seconds=self._input_delete_delay_seconds,
                    retry_if=_input_in_use,
                    label=f"delete input {input_id}",
                )
                result.deleted_input_ids.append(input_id)
            except Exception as e:
                logger.warning(f"Input {input_id} of channel {channel_id} was not deleted: {e}")
                result.failed_input_ids.append(input_id)

        if record is not None:
            result.ledger_removed = await self._store.remove_event(channel_id)

        return result

    async def _attached_input_ids(self, region: str, channel_id: str) -> list[str]:
        try:
            channel = await self._medialive.describe_channel(region, channel_id)
        except ClientError as e:
            logger.warning(f"Cannot list inputs of untracked channel {channel_id}: {client_error_message(e)}")
            return []
        return [a["InputId"] for a in channel.get("InputAttachments") or [] if a.get("InputId")]
