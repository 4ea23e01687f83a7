"""Shared builders for ledger records and AWS errors."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

from app.schemas.event import ChannelClass, EventRecord, InputType, Lifetime, compute_booking_window
from app.shared.storage.ledger import LedgerStore

__all__ = ["make_client_error", "make_record", "ledger_path", "ledger_store"]


def make_client_error(code: str, status: int = 400, message: str = "boom", operation: str = "Op") -> ClientError:
    """Build a botocore ClientError the way AWS responses look."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


def make_record(
    channel_id: str = "1234567",
    region: str = "eu-west-1",
    input_ids: list[str] | None = None,
    event_name: str = "Opening Night",
    start: datetime | None = None,
) -> EventRecord:
    start = start or datetime(2025, 6, 10, 18, 0, tzinfo=timezone.utc)
    now = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)
    return EventRecord(
        event_name=event_name,
        channel_id=channel_id,
        input_ids=input_ids or ["7654321"],
        output_ids=["mp-channel-1"],
        lifetime=Lifetime(start=start),
        booking=compute_booking_window(start),
        created_at=now,
        updated_at=now,
        region=region,
        channel_class=ChannelClass.SINGLE_PIPELINE,
        input_type=InputType.RTMP_PUSH,
    )


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "events.json"


@pytest.fixture
def ledger_store(ledger_path: Path) -> LedgerStore:
    """Ledger store backed by a temporary file."""
    return LedgerStore(ledger_path)
