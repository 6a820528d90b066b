"""High-level async client for the HyperTrack v3 API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyhypertrack._constants import (
    RES_DEVICE,
    RES_DEVICES,
    RES_TRIP,
    RES_TRIP_COMPLETE,
    RES_TRIPS,
)
from pyhypertrack._transport import JsonTransport, Transport
from pyhypertrack.config import HypertrackConfig
from pyhypertrack.exceptions import HypertrackConfigError, HypertrackError, HypertrackTransportError
from pyhypertrack.models.device import Device
from pyhypertrack.models.trip import Trip

_logger = logging.getLogger(__name__)


def _unwrap_list(body: Any, endpoint: str) -> list[dict[str, Any]]:
    """Accept both a bare JSON array and a paginated ``{"data": [...]}`` page."""
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        body = body["data"]
    if not isinstance(body, list):
        raise HypertrackTransportError(f"Expected a list from {endpoint}", endpoint=endpoint)
    return [item for item in body if isinstance(item, dict)]


def _require_object(body: Any, endpoint: str) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise HypertrackTransportError(f"Expected an object from {endpoint}", endpoint=endpoint)
    return body


class HypertrackClient:
    """Async client for the HyperTrack devices and trips API.

    Usage::

        async with HypertrackClient(config) as client:
            devices = await client.device_list()
    """

    def __init__(
        self,
        config: HypertrackConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> HypertrackClient:
        if self._transport is not None:
            return self
        if not self._config.has_credentials:
            raise HypertrackConfigError("account_id and secret_key are required for the API client")
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = JsonTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise HypertrackError("Client not initialized. Use 'async with HypertrackClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    async def device_list(self) -> list[Device]:
        """List all devices of the account."""
        body = await self._require_transport().request("GET", RES_DEVICES)
        return [Device.model_validate(item) for item in _unwrap_list(body, RES_DEVICES)]

    async def device_get(self, device_id: str) -> Device:
        endpoint = RES_DEVICE.format(device_id=device_id)
        body = await self._require_transport().request("GET", endpoint)
        return Device.model_validate(_require_object(body, endpoint))

    async def device_delete(self, device_id: str) -> None:
        """Deactivate and remove a device."""
        endpoint = RES_DEVICE.format(device_id=device_id)
        await self._require_transport().request("DELETE", endpoint)
        _logger.debug("Device deleted device_id=%s", device_id)

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    async def trip_create(
        self,
        device_id: str,
        destination: dict[str, Any],
        *,
        geofences: list[dict[str, Any]] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Trip:
        """Start a trip for *device_id* towards *destination*.

        Parameters
        ----------
        destination : dict
            Destination object, usually ``{"geometry": {...}, "radius": ...}``.
        geofences : list of dict, optional
            Additional geofences to monitor during the trip.
        metadata : dict, optional
            Free-form metadata attached to the trip.
        """
        payload: dict[str, Any] = {
            "device_id": device_id,
            "destination": destination,
        }
        if geofences is not None:
            payload["geofences"] = geofences
        if metadata is not None:
            payload["metadata"] = metadata
        body = await self._require_transport().request("POST", RES_TRIPS, json_body=payload)
        return Trip.model_validate(_require_object(body, RES_TRIPS))

    async def trip_list(self, limit: int = 50, offset: int = 0) -> list[Trip]:
        body = await self._require_transport().request(
            "GET",
            RES_TRIPS,
            params={"limit": limit, "offset": offset},
        )
        return [Trip.model_validate(item) for item in _unwrap_list(body, RES_TRIPS)]

    async def trip_get(self, trip_id: str) -> Trip:
        endpoint = RES_TRIP.format(trip_id=trip_id)
        body = await self._require_transport().request("GET", endpoint)
        return Trip.model_validate(_require_object(body, endpoint))

    async def trip_complete(self, trip_id: str) -> dict[str, Any]:
        """Mark a trip as completed.

        Returns
        -------
        dict
            Decoded API response, empty when the API sends no body.
        """
        endpoint = RES_TRIP_COMPLETE.format(trip_id=trip_id)
        body = await self._require_transport().request("POST", endpoint)
        return body if isinstance(body, dict) else {}
