"""Referee protocol: message codec and ports."""

from .codec import (
    Event,
    InitEvent,
    ProtocolError,
    ShotEvent,
    format_event,
    format_target,
    parse_event,
)
from .port import EventPort, StdioPort

__all__ = [
    "Event",
    "EventPort",
    "InitEvent",
    "ProtocolError",
    "ShotEvent",
    "StdioPort",
    "format_event",
    "format_target",
    "parse_event",
]
