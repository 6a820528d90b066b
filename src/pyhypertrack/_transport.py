"""HTTP transport with basic auth and JSON status mapping."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyhypertrack._constants import USER_AGENT
from pyhypertrack._redact import redact_for_log
from pyhypertrack.config import HypertrackConfig
from pyhypertrack.exceptions import (
    HypertrackClientError,
    HypertrackHttpError,
    HypertrackServerError,
    HypertrackTransportError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`JsonTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def raise_for_status(status: int, endpoint: str, body: Any) -> None:
    """Map a non-success HTTP status onto the exception hierarchy."""
    if 200 <= status < 300:
        return
    message = f"HTTP {status} from {endpoint}: {str(body)[:200]}"
    if status >= 500:
        raise HypertrackServerError(message, status_code=status, endpoint=endpoint, body=body)
    if status >= 400:
        raise HypertrackClientError(message, status_code=status, endpoint=endpoint, body=body)
    raise HypertrackHttpError(message, status_code=status, endpoint=endpoint, body=body)


class JsonTransport:
    """JSON-over-HTTP transport authenticated with the account credentials."""

    def __init__(self, config: HypertrackConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._auth = aiohttp.BasicAuth(config.account_id, config.secret_key)
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        An empty response body decodes to ``None``.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug(
            "%s %s params=%s body=%s",
            method,
            url,
            redact_for_log(dict(params) if params else None),
            redact_for_log(dict(json_body) if json_body else None),
        )

        try:
            async with self._http.request(
                method,
                url,
                params=dict(params) if params else None,
                json=dict(json_body) if json_body is not None else None,
                headers=headers,
                auth=self._auth,
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise HypertrackTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise HypertrackTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc

        body: Any = None
        if text.strip():
            try:
                body = json.loads(text)
            except json.JSONDecodeError as exc:
                if 200 <= status < 300:
                    raise HypertrackTransportError(
                        f"Invalid JSON from {endpoint}: {text[:200]}",
                        endpoint=endpoint,
                    ) from exc
                body = text

        _logger.debug("HTTP %s from %s body=%s", status, endpoint, redact_for_log(body))
        raise_for_status(status, endpoint, body)
        return body
