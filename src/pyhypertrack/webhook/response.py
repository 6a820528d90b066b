"""Webhook response envelope."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from pyhypertrack._constants import JSON_CONTENT_TYPE


@dataclasses.dataclass(frozen=True)
class ResponseEnvelope:
    """Status code plus a JSON object body (``{}`` when there is no detail)."""

    status: int
    body: dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": JSON_CONTENT_TYPE}

    def to_json(self) -> str:
        return json.dumps(self.body, separators=(",", ":"), default=str)


def serve(status: int, body: dict[str, Any] | None = None) -> ResponseEnvelope:
    return ResponseEnvelope(status=status, body=dict(body or {}))
