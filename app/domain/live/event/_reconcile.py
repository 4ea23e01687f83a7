"""Ledger reconciliation against the channels that actually exist."""

from collections.abc import Collection, Mapping

from loguru import logger

from app.schemas.event import EventRecord
from app.services.integrations.medialive_service import MediaLiveService
from app.shared.storage.ledger import LedgerStore


def find_stale_event_ids(
    events: Mapping[str, EventRecord],
    region: str,
    live_channel_ids: Collection[str],
) -> list[str]:
    """Ledger keys in `region` whose channel is gone. Other regions are never reported."""
    return [
        key
        for key, record in events.items()
        if record.region == region and record.channel_id not in live_channel_ids
    ]


class ReconcileOperations:
    def __init__(self, store: LedgerStore, medialive: MediaLiveService) -> None:
        self._store = store
        self._medialive = medialive

    async def reconcile(self, region: str) -> list[str]:
        """Remove ledger entries of `region` whose channel no longer exists.

        Returns:
            Removed ledger keys
        """
        live_ids = await self._medialive.list_channel_ids(region)
        removed = await self._store.prune(lambda events: find_stale_event_ids(events, region, live_ids))
        if removed:
            logger.info(f"Reconciled ledger for {region}: removed {removed}")
        return removed

    async def reconcile_safely(self, region: str) -> list[str]:
        """Reconcile without ever failing the caller."""
        try:
            return await self.reconcile(region)
        except Exception as e:
            logger.warning(f"Ledger reconciliation for {region} failed: {e}")
            return []
