"""Pydantic schemas persisted in the event ledger."""

from .event import (
    Booking,
    ChannelClass,
    EventRecord,
    InputType,
    LedgerRoot,
    Lifetime,
    compute_booking_window,
    parse_lifetime_start,
    utc_now,
)

__all__ = [
    "Booking",
    "ChannelClass",
    "EventRecord",
    "InputType",
    "LedgerRoot",
    "Lifetime",
    "compute_booking_window",
    "parse_lifetime_start",
    "utc_now",
]
