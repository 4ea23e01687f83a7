"""Tests for the dashboard data loader."""

from unittest.mock import AsyncMock

import pytest

from app.domain.live.dashboard.dashboard_domain import DashboardService
from app.domain.live.event.event_domain import EventService
from app.services.integrations.aws_catalog_service import AwsCatalogService
from app.services.integrations.medialive_service import MediaLiveService
from tests.fixtures.aws_fixtures import make_client_error


@pytest.fixture
def events() -> AsyncMock:
    return AsyncMock(spec=EventService)


@pytest.fixture
def medialive() -> AsyncMock:
    medialive = AsyncMock(spec=MediaLiveService)
    medialive.list_channels.return_value = [{"Id": "ch-1"}]
    medialive.list_inputs.return_value = [{"Id": "in-1"}]
    medialive.list_input_devices.return_value = []
    medialive.list_input_security_groups.return_value = [{"Id": "sg-1"}]
    return medialive


@pytest.fixture
def catalog() -> AsyncMock:
    catalog = AsyncMock(spec=AwsCatalogService)
    catalog.list_regions.return_value = ["eu-west-1", "us-east-1"]
    catalog.list_mediaconnect_flows.return_value = []
    catalog.list_mediapackage_channels.return_value = [{"Id": "mp-1"}]
    return catalog


@pytest.fixture
def service(events: AsyncMock, medialive: AsyncMock, catalog: AsyncMock) -> DashboardService:
    return DashboardService(events=events, medialive=medialive, catalog=catalog)


class TestLoadDashboard:
    async def test_reconciles_then_lists_everything(self, service: DashboardService, events: AsyncMock):
        view = await service.load_dashboard("eu-west-1")

        events.reconcile_safely.assert_awaited_once_with("eu-west-1")
        assert view.error is None
        assert view.channels == [{"Id": "ch-1"}]
        assert view.inputs == [{"Id": "in-1"}]
        assert view.available_regions == ["eu-west-1", "us-east-1"]
        assert view.input_security_groups == [{"Id": "sg-1"}]
        assert view.mediapackage_channels == [{"Id": "mp-1"}]

    async def test_listing_failure_sets_error_and_keeps_regions(self, service: DashboardService, medialive: AsyncMock):
        medialive.list_inputs.side_effect = make_client_error("AccessDeniedException", 403)

        view = await service.load_dashboard("eu-west-1")

        assert view.error is not None
        assert "eu-west-1" in view.error
        assert view.channels == []
        assert view.available_regions == ["eu-west-1", "us-east-1"]

    async def test_every_listing_is_awaited_when_several_fail(
        self, service: DashboardService, medialive: AsyncMock, catalog: AsyncMock
    ):
        # Arrange
        medialive.list_channels.side_effect = make_client_error("AccessDeniedException", 403)
        catalog.list_mediaconnect_flows.side_effect = make_client_error("ThrottlingException", 429)

        # Act
        view = await service.load_dashboard("eu-west-1")

        # Assert
        assert view.error is not None
        assert view.channels == []
        medialive.list_inputs.assert_awaited_once_with("eu-west-1")
        medialive.list_input_devices.assert_awaited_once_with("eu-west-1")
        medialive.list_input_security_groups.assert_awaited_once_with("eu-west-1")
        catalog.list_mediaconnect_flows.assert_awaited_once_with("eu-west-1")
        catalog.list_mediapackage_channels.assert_awaited_once_with("eu-west-1")
