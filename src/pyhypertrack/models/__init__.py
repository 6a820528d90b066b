"""Data models for HyperTrack API payloads and webhook events."""

from pyhypertrack.models._base import HypertrackBaseModel
from pyhypertrack.models.device import Device
from pyhypertrack.models.event import Event, EventType, parse_event_batch
from pyhypertrack.models.trip import Trip

__all__ = [
    "Device",
    "Event",
    "EventType",
    "HypertrackBaseModel",
    "Trip",
    "parse_event_batch",
]
