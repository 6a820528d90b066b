"""Trip model."""

from __future__ import annotations

from typing import Any

from pyhypertrack.models._base import HypertrackBaseModel


class Trip(HypertrackBaseModel):
    """A trip as returned by ``/trips``."""

    trip_id: str
    device_id: str | None = None
    status: str | None = None
    started_at: str | None = None
    completed_at: str | None = None
    destination: dict[str, Any] | None = None
    geofences: list[dict[str, Any]] | None = None
    metadata: dict[str, Any] | None = None
    estimate: dict[str, Any] | None = None
    summary: dict[str, Any] | None = None
    views: dict[str, Any] | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"
