"""Explicit dependency bundle for the webhook dispatcher."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from pyhypertrack.config import HypertrackConfig
from pyhypertrack.webhook.confirmation import ConfirmationFetcher, HttpConfirmationFetcher
from pyhypertrack.webhook.hooks import HookRegistry
from pyhypertrack.webhook.reporting import ErrorReporter
from pyhypertrack.webhook.trust_store import MemoryTrustStore, TrustStore

if TYPE_CHECKING:
    from pyhypertrack.client import HypertrackClient


@dataclasses.dataclass
class WebhookContext:
    """Everything a dispatcher needs, constructed once per endpoint.

    ``client`` is not used by the dispatcher itself; it is carried here so
    hook implementations built from the same context can reach the API.
    """

    config: HypertrackConfig = dataclasses.field(default_factory=HypertrackConfig)
    hooks: HookRegistry = dataclasses.field(default_factory=HookRegistry)
    store: TrustStore = dataclasses.field(default_factory=MemoryTrustStore)
    reporter: ErrorReporter = dataclasses.field(default_factory=ErrorReporter)
    fetcher: ConfirmationFetcher | None = None
    client: HypertrackClient | None = None

    def __post_init__(self) -> None:
        if self.fetcher is None:
            self.fetcher = HttpConfirmationFetcher(timeout=self.config.confirmation_timeout)

    @property
    def subscription_key(self) -> str:
        return f"{self.config.key_prefix}/subscription_arn"

    def message_key(self, message_id: str) -> str:
        return f"{self.config.key_prefix}/{message_id}"
