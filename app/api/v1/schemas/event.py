from pydantic import BaseModel, ConfigDict, Field

from app.schemas.event import EventRecord


class CreateEventIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_name: str | None = Field(default=None, alias="eventName", description="Display name of the event")
    lifetime_start: str | None = Field(default=None, alias="lifetimeStart", description="ISO date or datetime")
    lifetime_end: str | None = Field(default=None, alias="lifetimeEnd", description="Optional ISO date or datetime")
    region: str | None = Field(default=None, description="AWS region, e.g. eu-west-1")
    channel_class: str | None = Field(default=None, alias="channelClass", description="STANDARD or SINGLE_PIPELINE")
    input_type: str | None = Field(
        default=None,
        alias="inputType",
        description="RTMP_PUSH, MP4_FILE, INPUT_DEVICE or MEDIACONNECT",
    )
    output_id: str | None = Field(default=None, alias="outputId", description="MediaPackage channel id")
    source_id: str | None = Field(default=None, alias="sourceId", description="S3 key for MP4_FILE inputs")
    source_id_1: str | None = Field(
        default=None, alias="sourceId1", description="Device id or flow ARN for pipeline 0"
    )
    source_id_2: str | None = Field(
        default=None, alias="sourceId2", description="Device id or flow ARN for pipeline 1 (STANDARD only)"
    )


class UpdateEventIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_name: str | None = Field(default=None, alias="eventName")
    lifetime_start: str | None = Field(default=None, alias="lifetimeStart")
    lifetime_end: str | None = Field(default=None, alias="lifetimeEnd")


class EventsOut(BaseModel):
    events: dict[str, EventRecord]


class EventDetailOut(BaseModel):
    event: EventRecord
    channel: dict
    inputs: list[dict]
