"""Unit tests for the dashboard page."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.pages import dashboard as dashboard_page
from app.api.v1.dependency import get_dashboard_service, get_event_service
from app.app_config import AppEnvironConfig
from app.domain.live.dashboard.dashboard_domain import DashboardService, DashboardView
from app.domain.live.event.event_domain import EventService
from app.schemas.event import LedgerRoot
from tests.fixtures.aws_fixtures import make_record


@pytest.fixture
def mock_dashboard_service() -> AsyncMock:
    service = AsyncMock(spec=DashboardService)
    service.load_dashboard.side_effect = lambda region: DashboardView(
        region=region,
        channels=[{"Id": "ch-1", "Name": "<script>x</script>", "State": "IDLE", "ChannelClass": "STANDARD"}],
        available_regions=["eu-west-1", "us-east-1"],
    )
    return service


@pytest.fixture
def mock_event_service() -> AsyncMock:
    service = AsyncMock(spec=EventService)
    service.list_events.return_value = LedgerRoot(
        events={
            "ch-1": make_record(channel_id="ch-1", region="eu-west-1", event_name="Gala"),
            "ch-2": make_record(channel_id="ch-2", region="us-east-1", event_name="Elsewhere"),
        }
    )
    return service


@pytest.fixture
def client(mock_dashboard_service: AsyncMock, mock_event_service: AsyncMock) -> TestClient:
    app = FastAPI()
    app.dependency_overrides[get_dashboard_service] = lambda: mock_dashboard_service
    app.dependency_overrides[get_event_service] = lambda: mock_event_service
    app.include_router(dashboard_page.router)
    return TestClient(app)


class TestDashboardPage:
    def test_renders_region_resources(self, client: TestClient, mock_dashboard_service: AsyncMock):
        response = client.get("/", params={"region": "eu-west-1", "message": "Done", "messageStatus": "success"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "alert-success" in html
        assert "Done" in html
        assert "Gala" in html
        assert "Elsewhere" not in html
        assert "&lt;script&gt;x&lt;/script&gt;" in html
        mock_dashboard_service.load_dashboard.assert_awaited_once_with("eu-west-1")

    def test_defaults_to_configured_region(self, client: TestClient, mock_dashboard_service: AsyncMock):
        response = client.get("/")

        assert response.status_code == 200
        mock_dashboard_service.load_dashboard.assert_awaited_once_with("eu-west-1")

    def test_config_error_without_any_region(
        self, client: TestClient, mock_dashboard_service: AsyncMock, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(dashboard_page, "get_app_environ_config", lambda: AppEnvironConfig(AWS_REGION=None))

        response = client.get("/")

        assert response.status_code == 200
        assert "Configuration Error" in response.text
        mock_dashboard_service.load_dashboard.assert_not_awaited()

    def test_mixed_offset_and_plain_start_times_render(self, client: TestClient, mock_event_service: AsyncMock):
        # Arrange
        plain = make_record(channel_id="ch-3", event_name="Matinee").to_ledger()
        plain["lifetime"] = {"start": "2025-06-09T14:00:00"}
        aware = make_record(channel_id="ch-1", event_name="Gala").to_ledger()
        mock_event_service.list_events.return_value = LedgerRoot.model_validate(
            {"events": {"ch-1": aware, "ch-3": plain}}
        )

        # Act
        response = client.get("/", params={"region": "eu-west-1"})

        # Assert
        assert response.status_code == 200
        assert response.text.index("Matinee") < response.text.index("Gala")
