"""Webhook event model.

Every notification delivered to the webhook endpoint is a JSON array of
these records.  Parsing is lenient: extra fields are ignored, values that
do not map cleanly are passed through, and an unknown or missing ``type``
is kept so the dispatcher can count that one event as a failure instead
of rejecting the whole batch.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, TypeAdapter, ValidationError


class EventType(StrEnum):
    LOCATION = "location"
    DEVICE_STATUS = "device_status"
    BATTERY = "battery"
    TRIP = "trip"

    @classmethod
    def resolve(cls, value: str | EventType) -> EventType | None:
        """Map *value* to a member, ``None`` when there is none."""
        try:
            return cls(value)
        except ValueError:
            return None


_DATETIME = TypeAdapter(datetime)


def parse_event_timestamp(value: Any) -> Any:
    """Coerce ISO 8601 strings and epoch numbers to datetimes.

    Anything else is handed to the hook untouched rather than failing the
    batch.
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        return value


def _as_text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _as_type(value: Any) -> Any:
    return "" if value is None else _as_text(value)


EventTimestamp = Annotated[Any, BeforeValidator(parse_event_timestamp)]
"""A :class:`datetime` when the payload value parses as one, else the raw value."""


class Event(BaseModel):
    """A single typed update from a device.

    A missing ``type`` resolves to no :class:`EventType`, so the dispatcher
    counts the event as failed instead of rejecting its batch.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Annotated[str, BeforeValidator(_as_type)] = ""
    device_id: Annotated[str | None, BeforeValidator(_as_text)] = None
    data: Any = None
    created_at: EventTimestamp = None
    recorded_at: EventTimestamp = None

    @property
    def kind(self) -> EventType | None:
        return EventType.resolve(self.type)


_RAW_BATCH = TypeAdapter(list[Any])


def parse_event_batch(body: bytes | str) -> list[Event]:
    """Parse a notification body into an ordered list of events.

    Items are mapped one by one; an item that is not an object, or whose
    fields cannot be mapped, becomes an untyped :class:`Event` so it still
    occupies its slot in the batch.

    Raises :class:`pydantic.ValidationError` when the body is not a JSON
    array.
    """
    events: list[Event] = []
    for item in _RAW_BATCH.validate_json(body):
        if not isinstance(item, dict):
            events.append(Event())
            continue
        try:
            events.append(Event.model_validate(item))
        except ValidationError:
            events.append(Event())
    return events
