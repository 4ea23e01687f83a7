"""Event domain service - provisioning, tracking and teardown of live events."""

from app.app_config import AppEnvironConfig, get_app_environ_config
from app.domain.live.channel.channel_domain import ChannelService
from app.domain.live.input.input_domain import InputService
from app.schemas.event import EventRecord, LedgerRoot
from app.services.integrations.medialive_service import MediaLiveService, medialive_service
from app.shared.storage.ledger import LedgerStore, get_ledger_store

from ._provisioning import ProvisioningOperations
from ._readiness import ReadinessOperations
from ._reconcile import ReconcileOperations
from ._teardown import TeardownOperations
from .event_models import EventCreateParams, EventDetailResponse, EventUpdateParams, TeardownResult


class EventService:
    """Facade over the event operations, all sharing one ledger store."""

    def __init__(
        self,
        store: LedgerStore | None = None,
        medialive: MediaLiveService | None = None,
        inputs: InputService | None = None,
        channels: ChannelService | None = None,
        cfg: AppEnvironConfig | None = None,
    ):
        store = store or get_ledger_store()
        medialive = medialive or medialive_service
        cfg = cfg or get_app_environ_config()
        inputs = inputs or InputService(medialive=medialive, cfg=cfg)
        channels = channels or ChannelService(medialive=medialive, cfg=cfg)

        self._store = store
        self._provisioning = ProvisioningOperations(store, inputs, channels)
        self._reconcile = ReconcileOperations(store, medialive)
        self._readiness = ReadinessOperations(store, medialive, cfg)
        self._teardown = TeardownOperations(store, medialive, inputs)

    # ==================== EVENTS ====================

    async def list_events(self) -> LedgerRoot:
        return await self._store.load()

    async def create_event(self, params: EventCreateParams) -> EventRecord:
        """Provision input and channel, then record the event."""
        return await self._provisioning.create_event(params)

    async def update_event(self, channel_id: str, params: EventUpdateParams) -> EventRecord:
        """Raises AppError if the event is not in the ledger."""
        return await self._provisioning.update_event(channel_id, params)

    async def get_event_details(self, channel_id: str) -> EventDetailResponse:
        return await self._readiness.get_event_details(channel_id)

    async def destroy_event(self, region: str, channel_id: str) -> TeardownResult:
        """Delete a channel with its inputs; works for channels never recorded in the ledger."""
        return await self._teardown.destroy(region, channel_id)

    # ==================== LEDGER UPKEEP ====================

    async def reconcile(self, region: str) -> list[str]:
        return await self._reconcile.reconcile(region)

    async def reconcile_safely(self, region: str) -> list[str]:
        return await self._reconcile.reconcile_safely(region)
