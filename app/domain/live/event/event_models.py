"""Event domain models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.event import EventRecord

# (attribute, wire name) pairs that a creation request must carry
REQUIRED_CREATE_FIELDS = (
    ("event_name", "eventName"),
    ("lifetime_start", "lifetimeStart"),
    ("region", "region"),
    ("channel_class", "channelClass"),
    ("input_type", "inputType"),
    ("output_id", "outputId"),
)


class EventCreateParams(BaseModel):
    """Parameters for provisioning an event.

    Every field is optional at the model level so that validation can report
    all missing fields at once instead of failing on the first one.
    """

    model_config = ConfigDict(populate_by_name=True)

    event_name: str | None = Field(default=None, alias="eventName")
    lifetime_start: str | None = Field(default=None, alias="lifetimeStart")
    lifetime_end: str | None = Field(default=None, alias="lifetimeEnd")
    region: str | None = None
    channel_class: str | None = Field(default=None, alias="channelClass")
    input_type: str | None = Field(default=None, alias="inputType")
    output_id: str | None = Field(default=None, alias="outputId")

    # MP4_FILE: S3 key of the asset
    source_id: str | None = Field(default=None, alias="sourceId")
    # INPUT_DEVICE / MEDIACONNECT: device id or flow ARN per pipeline
    source_id_1: str | None = Field(default=None, alias="sourceId1")
    source_id_2: str | None = Field(default=None, alias="sourceId2")


class EventUpdateParams(BaseModel):
    """Partial update; region, channel and inputs are fixed once created."""

    model_config = ConfigDict(populate_by_name=True)

    event_name: str | None = Field(default=None, alias="eventName")
    lifetime_start: str | None = Field(default=None, alias="lifetimeStart")
    lifetime_end: str | None = Field(default=None, alias="lifetimeEnd")


class EventDetailResponse(BaseModel):
    """Ledger entry with the live channel and input descriptions."""

    event: EventRecord
    channel: dict[str, Any]
    inputs: list[dict[str, Any]]


class TeardownResult(BaseModel):
    channel_id: str
    region: str
    deleted_input_ids: list[str] = Field(default_factory=list)
    failed_input_ids: list[str] = Field(default_factory=list)
    ledger_removed: bool = False
