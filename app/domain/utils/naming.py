import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")

MAX_BASE_NAME_LENGTH = 40


@dataclass(frozen=True)
class ResourceNames:
    channel_name: str
    input_name: str
    output_name: str


def sanitize_base_name(event_name: str) -> str:
    base = _WHITESPACE.sub("_", event_name)
    base = _UNSAFE.sub("", base)
    return base[:MAX_BASE_NAME_LENGTH]


def generate_resource_names(event_name: str) -> ResourceNames:
    """Derive consistent AWS resource names from an event display name."""
    base = sanitize_base_name(event_name)
    return ResourceNames(
        channel_name=f"{base}_channel",
        input_name=f"{base}_input",
        output_name=f"{base}_output",
    )
