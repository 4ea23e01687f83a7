"""Event provisioning and ledger updates."""

from datetime import datetime
from enum import Enum
from typing import TypeVar

from loguru import logger

from app.domain.live.channel.channel_domain import ChannelService
from app.domain.live.input._strategies import InputSource
from app.domain.live.input.input_domain import InputService
from app.domain.utils.naming import generate_resource_names, sanitize_base_name
from app.schemas.event import (
    ChannelClass,
    EventRecord,
    InputType,
    Lifetime,
    compute_booking_window,
    parse_lifetime_start,
    utc_now,
)
from app.shared.storage.ledger import LedgerStore
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from .event_models import REQUIRED_CREATE_FIELDS, EventCreateParams, EventUpdateParams

E = TypeVar("E", bound=Enum)


def _invalid(errmesg: str) -> AppError:
    return AppError(
        errcode=AppErrorCode.E_INVALID_REQUEST,
        errmesg=errmesg,
        status_code=HttpStatusCode.BAD_REQUEST,
    )


def _parse_choice(enum_cls: type[E], value: str, field: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise _invalid(f"Invalid {field} '{value}', expected one of: {allowed}") from None


def _parse_datetime(value: str, field: str) -> datetime:
    try:
        return parse_lifetime_start(value)
    except ValueError:
        raise _invalid(f"Invalid {field} '{value}', expected an ISO date or datetime") from None


def _check_lifetime(start: datetime, end: datetime | None) -> None:
    if end is not None and end <= start:
        raise _invalid("lifetimeEnd must be later than lifetimeStart")


class ProvisioningOperations:
    """Creates the input and channel of an event and records it in the ledger."""

    def __init__(self, store: LedgerStore, inputs: InputService, channels: ChannelService) -> None:
        self._store = store
        self._inputs = inputs
        self._channels = channels

    async def create_event(self, params: EventCreateParams) -> EventRecord:
        """
        Provision an event.

        Validation and input-request resolution happen before any remote write.
        If channel creation fails, the freshly created input is deleted on a
        best-effort basis and the original error is re-raised.

        Raises:
            AppError: On missing or invalid fields
            ClientError: If AWS rejects input or channel creation
        """
        missing = [wire for attr, wire in REQUIRED_CREATE_FIELDS if not (getattr(params, attr) or "").strip()]
        if missing:
            raise _invalid(f"Missing required fields: {', '.join(missing)}")

        event_name = params.event_name.strip()  # type: ignore[union-attr]
        if not sanitize_base_name(event_name):
            raise _invalid("eventName has no characters usable in resource names")

        region = params.region.strip()  # type: ignore[union-attr]
        output_id = params.output_id.strip()  # type: ignore[union-attr]
        channel_class = _parse_choice(ChannelClass, params.channel_class, "channelClass")  # type: ignore[arg-type]
        input_type = _parse_choice(InputType, params.input_type, "inputType")  # type: ignore[arg-type]
        lifetime_start = _parse_datetime(params.lifetime_start, "lifetimeStart")  # type: ignore[arg-type]
        lifetime_end = _parse_datetime(params.lifetime_end, "lifetimeEnd") if params.lifetime_end else None
        _check_lifetime(lifetime_start, lifetime_end)

        names = generate_resource_names(event_name)
        source = InputSource(
            source_id=params.source_id,
            source_id_1=params.source_id_1,
            source_id_2=params.source_id_2,
        )
        input_request = await self._inputs.resolve_request(
            region, input_type, names.input_name, channel_class, source
        )

        created_input = await self._inputs.create_input(region, input_request)
        input_id = created_input["Id"]

        try:
            channel = await self._channels.create_channel(
                region=region,
                name=names.channel_name,
                channel_class=channel_class,
                input_id=input_id,
                output_id=output_id,
            )
        except Exception:
            await self._discard_input(region, input_id)
            raise

        now = utc_now()
        record = EventRecord(
            event_name=event_name,
            channel_id=channel["Id"],
            input_ids=[input_id],
            output_ids=[output_id],
            lifetime=Lifetime(start=lifetime_start, end=lifetime_end),
            booking=compute_booking_window(lifetime_start),
            created_at=now,
            updated_at=now,
            scheduler=[],
            region=region,
            channel_class=channel_class,
            input_type=input_type,
        )
        await self._store.put_event(record)

        logger.info(f"Provisioned event '{event_name}' as channel {record.channel_id} in {region}")
        return record

    async def _discard_input(self, region: str, input_id: str) -> None:
        try:
            await self._inputs.delete_input(region, input_id)
            logger.warning(f"Channel creation failed, removed orphaned input {input_id}")
        except Exception as e:
            logger.warning(f"Channel creation failed and orphaned input {input_id} could not be removed: {e}")

    async def update_event(self, channel_id: str, params: EventUpdateParams) -> EventRecord:
        """
        Update name and/or lifetime of an event.

        Changing the start recomputes the booking window.

        Raises:
            AppError: If the event is unknown or a field is invalid
        """
        updates = params.model_dump(exclude_unset=True)

        async with self._store.mutate() as root:
            record = root.events.get(channel_id)
            if record is None:
                raise AppError(
                    errcode=AppErrorCode.E_EVENT_NOT_FOUND,
                    errmesg=f"Event not found: {channel_id}",
                    status_code=HttpStatusCode.NOT_FOUND,
                )

            if updates.get("event_name") is not None:
                event_name = updates["event_name"].strip()
                if not sanitize_base_name(event_name):
                    raise _invalid("eventName has no characters usable in resource names")
                record.event_name = event_name

            if updates.get("lifetime_start") is not None:
                start = _parse_datetime(updates["lifetime_start"], "lifetimeStart")
                record.lifetime.start = start
                record.booking = compute_booking_window(start)

            if "lifetime_end" in updates:
                end = updates["lifetime_end"]
                record.lifetime.end = _parse_datetime(end, "lifetimeEnd") if end else None

            _check_lifetime(record.lifetime.start, record.lifetime.end)

            record.updated_at = utc_now()
            updated = record.model_copy(deep=True)

        logger.debug(f"Updated event {channel_id}: {sorted(updates)}")
        return updated
