"""Event ledger schemas.

The ledger file stores camelCase keys; Python code uses snake_case attributes.
"""

from datetime import date, datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

BOOKING_LEAD = timedelta(days=7)
BOOKING_TAIL = timedelta(days=14)


class ChannelClass(str, Enum):
    """Redundancy tier of a channel and of the inputs attached to it."""

    STANDARD = "STANDARD"  # dual pipeline
    SINGLE_PIPELINE = "SINGLE_PIPELINE"

    @property
    def pipelines(self) -> int:
        return 2 if self is ChannelClass.STANDARD else 1


class InputType(str, Enum):
    RTMP_PUSH = "RTMP_PUSH"
    MP4_FILE = "MP4_FILE"
    INPUT_DEVICE = "INPUT_DEVICE"
    MEDIACONNECT = "MEDIACONNECT"


def assume_utc(value: datetime) -> datetime:
    """Timestamps without an offset are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Lifetime(_CamelModel):
    start: datetime
    end: datetime | None = None

    @field_validator("start", "end")
    @classmethod
    def _aware(cls, value: datetime | None) -> datetime | None:
        return None if value is None else assume_utc(value)


class Booking(_CamelModel):
    start: date
    end: date


class EventRecord(_CamelModel):
    """A scheduled broadcast tracked by this tool, keyed by its channel id."""

    event_name: str
    channel_id: str
    input_ids: list[str] = Field(min_length=1, max_length=2)
    output_ids: list[str] = Field(default_factory=list)
    lifetime: Lifetime
    booking: Booking
    created_at: datetime
    updated_at: datetime
    # Reserved for scheduled actions, always empty for now
    scheduler: list[dict] = Field(default_factory=list)
    region: str
    channel_class: ChannelClass
    input_type: InputType

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return assume_utc(value)

    def to_ledger(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class LedgerRoot(BaseModel):
    events: dict[str, EventRecord] = Field(default_factory=dict)

    def to_ledger(self) -> dict:
        return {"events": {k: v.to_ledger() for k, v in self.events.items()}}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_lifetime_start(value: str | datetime) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC.

    Raises:
        ValueError: If the value is not an ISO date/datetime
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).strip())
    return assume_utc(parsed)


def compute_booking_window(lifetime_start: datetime) -> Booking:
    """Booking runs from a week before the event start to two weeks after it."""
    start_day = lifetime_start.date()
    return Booking(start=start_day - BOOKING_LEAD, end=start_day + BOOKING_TAIL)
