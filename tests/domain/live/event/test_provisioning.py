"""Tests for event provisioning and updates."""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock

import orjson
import pytest

from app.domain.live.channel.channel_domain import ChannelService
from app.domain.live.event._provisioning import ProvisioningOperations
from app.domain.live.event.event_models import EventCreateParams, EventUpdateParams
from app.domain.live.input._strategies import InputSource
from app.domain.live.input.input_domain import InputService
from app.schemas.event import ChannelClass, InputType
from app.services.integrations.medialive_service import MediaLiveService
from app.services.integrations.s3_storage import S3Service
from app.shared.storage.ledger import LedgerStore
from app.utils.app_errors import AppError, AppErrorCode
from tests.fixtures.aws_fixtures import make_client_error, make_record


def _params(**overrides) -> EventCreateParams:
    data = {
        "eventName": "Opening Night",
        "lifetimeStart": "2025-06-10T18:00:00Z",
        "region": "eu-west-1",
        "channelClass": "SINGLE_PIPELINE",
        "inputType": "RTMP_PUSH",
        "outputId": "mp-channel-1",
    }
    data.update(overrides)
    return EventCreateParams.model_validate(data)


class TestCreateEvent:
    @pytest.fixture
    def inputs(self) -> AsyncMock:
        inputs = AsyncMock(spec=InputService)
        inputs.resolve_request.return_value = {"Name": "Opening_Night_input", "Type": "RTMP_PUSH"}
        inputs.create_input.return_value = {"Id": "in-1", "Name": "Opening_Night_input"}
        return inputs

    @pytest.fixture
    def channels(self) -> AsyncMock:
        channels = AsyncMock(spec=ChannelService)
        channels.create_channel.return_value = {"Id": "ch-1", "Name": "Opening_Night_channel"}
        return channels

    @pytest.fixture
    def ops(self, ledger_store: LedgerStore, inputs: AsyncMock, channels: AsyncMock) -> ProvisioningOperations:
        return ProvisioningOperations(ledger_store, inputs, channels)

    async def test_success_records_event(
        self, ops: ProvisioningOperations, ledger_store: LedgerStore, inputs: AsyncMock, channels: AsyncMock
    ):
        # Act
        record = await ops.create_event(_params())

        # Assert
        assert record.channel_id == "ch-1"
        assert record.input_ids == ["in-1"]
        assert record.output_ids == ["mp-channel-1"]
        assert record.booking.start == date(2025, 6, 3)
        assert record.booking.end == date(2025, 6, 24)
        assert record.channel_class is ChannelClass.SINGLE_PIPELINE
        assert record.input_type is InputType.RTMP_PUSH

    async def test_standard_tier_records_one_input(
        self, ops: ProvisioningOperations, ledger_store: LedgerStore, inputs: AsyncMock
    ):
        record = await ops.create_event(_params(channelClass="STANDARD"))

        assert record.channel_class is ChannelClass.STANDARD
        assert record.input_ids == ["in-1"]
        inputs.create_input.assert_awaited_once()
        assert (await ledger_store.get_event("ch-1")).input_ids == ["in-1"]
        assert record.scheduler == []

        inputs.resolve_request.assert_awaited_once_with(
            "eu-west-1",
            InputType.RTMP_PUSH,
            "Opening_Night_input",
            ChannelClass.SINGLE_PIPELINE,
            InputSource(),
        )
        channels.create_channel.assert_awaited_once_with(
            region="eu-west-1",
            name="Opening_Night_channel",
            channel_class=ChannelClass.SINGLE_PIPELINE,
            input_id="in-1",
            output_id="mp-channel-1",
        )
        assert await ledger_store.get_event("ch-1") == record

    async def test_missing_fields_are_listed(self, ops: ProvisioningOperations, inputs: AsyncMock):
        params = EventCreateParams.model_validate({"eventName": "x", "region": "eu-west-1"})

        with pytest.raises(AppError) as exc_info:
            await ops.create_event(params)

        assert exc_info.value.status_code == 400
        assert exc_info.value.errcode == AppErrorCode.E_INVALID_REQUEST.value
        for field in ("lifetimeStart", "channelClass", "inputType", "outputId"):
            assert field in exc_info.value.errmesg
        inputs.create_input.assert_not_awaited()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"channelClass": "TRIPLE"},
            {"inputType": "SRT"},
            {"lifetimeStart": "someday"},
            {"lifetimeEnd": "2025-06-01T00:00:00Z"},
            {"eventName": "!!!"},
        ],
    )
    async def test_invalid_values_rejected_before_any_write(
        self, ops: ProvisioningOperations, inputs: AsyncMock, channels: AsyncMock, overrides: dict
    ):
        with pytest.raises(AppError) as exc_info:
            await ops.create_event(_params(**overrides))

        assert exc_info.value.status_code == 400
        inputs.create_input.assert_not_awaited()
        channels.create_channel.assert_not_awaited()

    async def test_channel_failure_removes_created_input(
        self, ops: ProvisioningOperations, ledger_store: LedgerStore, inputs: AsyncMock, channels: AsyncMock
    ):
        # Arrange
        channels.create_channel.side_effect = make_client_error("BadRequestException", 400, "invalid role")

        # Act
        with pytest.raises(Exception) as exc_info:
            await ops.create_event(_params())

        # Assert
        assert "invalid role" in str(exc_info.value)
        inputs.delete_input.assert_awaited_once_with("eu-west-1", "in-1")
        assert (await ledger_store.load()).events == {}

    async def test_compensation_failure_keeps_original_error(
        self, ops: ProvisioningOperations, inputs: AsyncMock, channels: AsyncMock
    ):
        channels.create_channel.side_effect = make_client_error("BadRequestException", 400, "invalid role")
        inputs.delete_input.side_effect = make_client_error("ConflictException", 409, "in use")

        with pytest.raises(Exception, match="invalid role"):
            await ops.create_event(_params())


class TestMediaConnectValidation:
    async def test_standard_without_second_flow_names_pipeline_1(self, ledger_store: LedgerStore):
        # Arrange: real strategies, mocked AWS
        medialive = AsyncMock(spec=MediaLiveService)
        inputs = InputService(medialive=medialive, s3=AsyncMock(spec=S3Service))
        channels = AsyncMock(spec=ChannelService)
        ops = ProvisioningOperations(ledger_store, inputs, channels)

        # Act
        with pytest.raises(AppError) as exc_info:
            await ops.create_event(
                _params(
                    channelClass="STANDARD",
                    inputType="MEDIACONNECT",
                    sourceId1="arn:aws:mediaconnect:eu-west-1:123:flow:a",
                )
            )

        # Assert
        assert exc_info.value.status_code == 400
        assert "sourceId2" in exc_info.value.errmesg
        assert "pipeline 1" in exc_info.value.errmesg
        medialive.create_input.assert_not_awaited()
        channels.create_channel.assert_not_awaited()


class TestUpdateEvent:
    @pytest.fixture
    def ops(self, ledger_store: LedgerStore) -> ProvisioningOperations:
        return ProvisioningOperations(ledger_store, AsyncMock(spec=InputService), AsyncMock(spec=ChannelService))

    async def test_new_start_recomputes_booking(self, ops: ProvisioningOperations, ledger_store: LedgerStore):
        await ledger_store.put_event(make_record(channel_id="ch-1"))

        updated = await ops.update_event(
            "ch-1", EventUpdateParams.model_validate({"lifetimeStart": "2025-09-01T10:00:00Z"})
        )

        assert updated.booking.start == date(2025, 8, 25)
        assert updated.booking.end == date(2025, 9, 15)
        assert updated.event_name == "Opening Night"
        assert updated.updated_at > updated.created_at
        stored = await ledger_store.get_event("ch-1")
        assert stored.booking == updated.booking

    async def test_rename_only(self, ops: ProvisioningOperations, ledger_store: LedgerStore):
        original = make_record(channel_id="ch-1")
        await ledger_store.put_event(original)

        updated = await ops.update_event("ch-1", EventUpdateParams.model_validate({"eventName": "Closing Night"}))

        assert updated.event_name == "Closing Night"
        assert updated.booking == original.booking

    async def test_end_on_entry_stored_without_offset(
        self, ops: ProvisioningOperations, ledger_store: LedgerStore, ledger_path
    ):
        # Arrange
        entry = make_record(channel_id="ch-1").to_ledger()
        entry["lifetime"] = {"start": "2025-06-10T18:00:00"}
        ledger_path.parent.mkdir(parents=True)
        ledger_path.write_bytes(orjson.dumps({"events": {"ch-1": entry}}))

        # Act
        updated = await ops.update_event(
            "ch-1", EventUpdateParams.model_validate({"lifetimeEnd": "2025-06-11T00:00:00Z"})
        )

        # Assert
        assert updated.lifetime.start == datetime(2025, 6, 10, 18, 0, tzinfo=timezone.utc)
        assert updated.lifetime.end == datetime(2025, 6, 11, 0, 0, tzinfo=timezone.utc)

    async def test_unknown_event(self, ops: ProvisioningOperations):
        with pytest.raises(AppError) as exc_info:
            await ops.update_event("missing", EventUpdateParams.model_validate({"eventName": "x"}))

        assert exc_info.value.status_code == 404
        assert exc_info.value.errcode == AppErrorCode.E_EVENT_NOT_FOUND.value
