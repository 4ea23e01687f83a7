"""
Live event domain logic.

Includes:
- event: Event lifecycle (provisioning, ledger upkeep, readiness, teardown).
- input: MediaLive input creation per input kind.
- channel: Channel templates and lifecycle commands.
- dashboard: Data behind the control panel page.
"""
