"""Normalized inbound webhook requests.

Hosts hand the dispatcher a :class:`NotificationRequest` regardless of
the server they run on.  Header names are folded to one spelling so that
``X-Amz-Sns-Message-Type`` (HTTP) and ``HTTP_X_AMZ_SNS_MESSAGE_TYPE``
(WSGI/CGI environ) compare equal.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl

if TYPE_CHECKING:
    from aiohttp import web

_ENVIRON_PREFIX = "http_"


def normalize_header_name(name: str) -> str:
    """Lower-case *name*, strip the CGI ``HTTP_`` prefix and use ``_`` separators."""
    key = name.strip().lower().replace("-", "_")
    if key.startswith(_ENVIRON_PREFIX):
        key = key[len(_ENVIRON_PREFIX) :]
    return key


def normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {normalize_header_name(str(k)): str(v) for k, v in headers.items()}


@dataclasses.dataclass(frozen=True)
class NotificationRequest:
    """A single inbound webhook delivery with its body already consumed."""

    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    params: Mapping[str, str] = dataclasses.field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        return self.headers.get(normalize_header_name(name))

    @classmethod
    def build(
        cls,
        headers: Mapping[str, str],
        body: bytes | str = b"",
        params: Mapping[str, str] | None = None,
    ) -> NotificationRequest:
        raw = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        return cls(headers=normalize_headers(headers), params=dict(params or {}), body=raw)

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> NotificationRequest:
        """Build a request from a WSGI/CGI environ mapping.

        Only ``HTTP_*`` keys are treated as headers. The body is read once
        from ``wsgi.input``, bounded by ``CONTENT_LENGTH`` when present.
        """
        headers = {
            normalize_header_name(key): str(value)
            for key, value in environ.items()
            if str(key).upper().startswith("HTTP_")
        }
        params = dict(parse_qsl(str(environ.get("QUERY_STRING", "")), keep_blank_values=True))

        body = b""
        stream = environ.get("wsgi.input")
        if stream is not None:
            length = environ.get("CONTENT_LENGTH")
            try:
                size = int(length) if length not in (None, "") else -1
            except (TypeError, ValueError):
                size = -1
            body = stream.read(size) if size >= 0 else stream.read()
        return cls(headers=headers, params=params, body=body or b"")

    @classmethod
    async def from_aiohttp(cls, request: web.Request) -> NotificationRequest:
        body = await request.read()
        return cls(
            headers=normalize_headers(request.headers),
            params=dict(request.query),
            body=body,
        )
