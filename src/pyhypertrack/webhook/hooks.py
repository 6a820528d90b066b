"""Registrable per-event-type webhook hooks."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pyhypertrack.exceptions import RegistrationError
from pyhypertrack.models.event import EventType

_logger = logging.getLogger(__name__)

#: ``hook(device_id, data, created_at, recorded_at) -> bool``; may be a coroutine function.
#: Timestamps are datetimes when they parse as one, otherwise the raw payload value.
Hook = Callable[[str | None, Any, Any, Any], bool | Awaitable[bool]]


def log_hook(kind: EventType) -> Hook:
    """Default hook: log the event at DEBUG and report success."""

    def _hook(device_id: str | None, data: Any, created_at: Any, recorded_at: Any) -> bool:
        _logger.debug("%s hook: %s -> %s", kind.value, device_id, data)
        return True

    _hook.__name__ = f"log_{kind.value}_hook"
    return _hook


class HookRegistry:
    """One active hook per :class:`EventType`.

    Starts with logging defaults. Replace entries with :meth:`register`
    while configuring the webhook, before requests are dispatched.
    """

    def __init__(self, hooks: Mapping[str | EventType, Hook] | None = None) -> None:
        self._hooks: dict[EventType, Hook] = {kind: log_hook(kind) for kind in EventType}
        for name, handler in (hooks or {}).items():
            self.register(name, handler)

    def register(self, name: str | EventType, handler: Hook) -> None:
        """Install *handler* for the event type *name*.

        Raises
        ------
        RegistrationError
            *name* is not a known event type or *handler* is not callable.
        """
        kind = EventType.resolve(name)
        if kind is None:
            raise RegistrationError(f"Invalid name argument: {name!r}")
        if not callable(handler):
            raise RegistrationError(f"Invalid callable argument: {handler!r}")
        self._hooks[kind] = handler
        _logger.debug("Registered %s hook %r", kind.value, handler)

    def get(self, kind: EventType | None) -> Hook | None:
        if kind is None:
            return None
        return self._hooks.get(kind)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return EventType.resolve(name) in self._hooks
