"""Tests for ledger reconciliation."""

from unittest.mock import AsyncMock

import pytest

from app.domain.live.event._reconcile import ReconcileOperations, find_stale_event_ids
from app.services.integrations.medialive_service import MediaLiveService
from app.shared.storage.ledger import LedgerStore
from tests.fixtures.aws_fixtures import make_client_error, make_record


class TestFindStaleEventIds:
    def test_only_reports_requested_region(self):
        events = {
            "A": make_record(channel_id="A", region="eu-west-1"),
            "B": make_record(channel_id="B", region="eu-west-1"),
            "C": make_record(channel_id="C", region="us-east-1"),
        }

        stale = find_stale_event_ids(events, "eu-west-1", {"A"})

        assert stale == ["B"]


class TestReconcile:
    @pytest.fixture
    def medialive(self) -> AsyncMock:
        return AsyncMock(spec=MediaLiveService)

    @pytest.fixture
    def ops(self, ledger_store: LedgerStore, medialive: AsyncMock) -> ReconcileOperations:
        return ReconcileOperations(ledger_store, medialive)

    async def test_removes_missing_channels_of_region_only(
        self, ops: ReconcileOperations, ledger_store: LedgerStore, medialive: AsyncMock
    ):
        # Arrange
        for channel_id, region in (("A", "eu-west-1"), ("B", "eu-west-1"), ("C", "us-east-1")):
            await ledger_store.put_event(make_record(channel_id=channel_id, region=region))
        medialive.list_channel_ids.return_value = {"A"}

        # Act
        removed = await ops.reconcile("eu-west-1")

        # Assert
        assert removed == ["B"]
        root = await ledger_store.load()
        assert sorted(root.events) == ["A", "C"]
        medialive.list_channel_ids.assert_awaited_once_with("eu-west-1")

    async def test_nothing_to_remove(self, ops: ReconcileOperations, ledger_store: LedgerStore, medialive: AsyncMock):
        await ledger_store.put_event(make_record(channel_id="A"))
        medialive.list_channel_ids.return_value = {"A", "Z"}

        assert await ops.reconcile("eu-west-1") == []

    async def test_listing_failure_leaves_ledger_untouched(
        self, ops: ReconcileOperations, ledger_store: LedgerStore, medialive: AsyncMock
    ):
        await ledger_store.put_event(make_record(channel_id="A"))
        medialive.list_channel_ids.side_effect = make_client_error("AccessDeniedException", 403)

        with pytest.raises(Exception):
            await ops.reconcile("eu-west-1")
        assert await ops.reconcile_safely("eu-west-1") == []

        assert await ledger_store.get_event("A") is not None
