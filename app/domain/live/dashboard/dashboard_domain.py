"""Dashboard domain service - data behind the control panel page."""

import asyncio
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from app.domain.live.event.event_domain import EventService
from app.services.integrations.aws_catalog_service import AwsCatalogService, aws_catalog_service
from app.services.integrations.medialive_service import MediaLiveService, medialive_service


class DashboardView(BaseModel):
    region: str
    channels: list[dict[str, Any]] = Field(default_factory=list)
    inputs: list[dict[str, Any]] = Field(default_factory=list)
    available_regions: list[str] = Field(default_factory=list)
    link_devices: list[dict[str, Any]] = Field(default_factory=list)
    input_security_groups: list[dict[str, Any]] = Field(default_factory=list)
    mediaconnect_flows: list[dict[str, Any]] = Field(default_factory=list)
    mediapackage_channels: list[dict[str, Any]] = Field(default_factory=list)
    error: str | None = None


class DashboardService:
    def __init__(
        self,
        events: EventService | None = None,
        medialive: MediaLiveService | None = None,
        catalog: AwsCatalogService | None = None,
    ) -> None:
        self._medialive = medialive or medialive_service
        self._catalog = catalog or aws_catalog_service
        self._events = events or EventService(medialive=self._medialive)

    async def load_dashboard(self, region: str) -> DashboardView:
        """
        Reconcile the ledger for `region`, then fetch every listing concurrently.

        A failing listing does not raise: the view carries an error message and
        whatever region list could still be fetched.
        """
        await self._events.reconcile_safely(region)

        results = await asyncio.gather(
            self._medialive.list_channels(region),
            self._medialive.list_inputs(region),
            self._catalog.list_regions(),
            self._medialive.list_input_devices(region),
            self._medialive.list_input_security_groups(region),
            self._catalog.list_mediaconnect_flows(region),
            self._catalog.list_mediapackage_channels(region),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            for e in errors:
                logger.error(f"Failed to fetch AWS resources for {region}: {e}")
            view = DashboardView(
                region=region,
                error=(
                    f"Failed to fetch AWS resources for region {region}. "
                    "Check the server log and the credentials configuration."
                ),
            )
            try:
                view.available_regions = await self._catalog.list_regions()
            except Exception as region_err:
                logger.error(f"Failed to fetch available regions as well: {region_err}")
            return view

        channels, inputs, regions, devices, security_groups, flows, mp_channels = results
        return DashboardView(
            region=region,
            channels=channels,
            inputs=inputs,
            available_regions=regions,
            link_devices=devices,
            input_security_groups=security_groups,
            mediaconnect_flows=flows,
            mediapackage_channels=mp_channels,
        )
