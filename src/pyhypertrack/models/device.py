"""Device model."""

from __future__ import annotations

from typing import Any

from pyhypertrack.models._base import HypertrackBaseModel


class Device(HypertrackBaseModel):
    """A tracked device as returned by ``/devices``.

    Nested objects (status, location, battery, ...) are kept as plain
    dicts; their shape varies with SDK version and platform.
    """

    device_id: str
    name: str | None = None
    metadata: dict[str, Any] | None = None
    device_status: dict[str, Any] | None = None
    location: dict[str, Any] | None = None
    battery: str | dict[str, Any] | None = None
    device_info: dict[str, Any] | None = None
    registered_at: str | None = None

    @property
    def status(self) -> str | None:
        """Short device status value (``active``, ``inactive``, ``disconnected``)."""
        if not self.device_status:
            return None
        value = self.device_status.get("value")
        return str(value) if value is not None else None
