from __future__ import annotations

from typing import Any

import pytest

from pyhypertrack.config import HypertrackConfig
from pyhypertrack.webhook.context import WebhookContext
from pyhypertrack.webhook.dispatcher import NotificationDispatcher
from pyhypertrack.webhook.reporting import ErrorReporter
from pyhypertrack.webhook.trust_store import MemoryTrustStore

ARN = "arn:aws:sns:us-west-2:000000000000:hypertrack-webhook:0f2b-4c1d"

CONFIRMATION_XML = f"""<?xml version="1.0"?>
<ConfirmSubscriptionResponse xmlns="http://sns.amazonaws.com/doc/2010-03-31/">
  <ConfirmSubscriptionResult>
    <SubscriptionArn>{ARN}</SubscriptionArn>
  </ConfirmSubscriptionResult>
  <ResponseMetadata>
    <RequestId>075ecce8-8dac-11e1-bf80-f781d96e9307</RequestId>
  </ResponseMetadata>
</ConfirmSubscriptionResponse>
"""


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    def __init__(self, document: str = CONFIRMATION_XML, exc: BaseException | None = None) -> None:
        self.document = document
        self.exc = exc
        self.urls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.urls.append(url)
        if self.exc is not None:
            raise self.exc
        return self.document


class RecordingReporter(ErrorReporter):
    def __init__(self) -> None:
        self.errors: list[tuple[str, dict[str, Any]]] = []
        self.exceptions: list[tuple[BaseException, dict[str, Any]]] = []
        super().__init__(
            error_handler=lambda message, context: self.errors.append((message, dict(context))),
            exception_handler=lambda exc, context: self.exceptions.append((exc, dict(context))),
        )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryTrustStore:
    return MemoryTrustStore(clock=clock)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def context(store: MemoryTrustStore, fetcher: FakeFetcher, reporter: RecordingReporter) -> WebhookContext:
    return WebhookContext(
        config=HypertrackConfig(),
        store=store,
        fetcher=fetcher,
        reporter=reporter,
    )


@pytest.fixture
def dispatcher(context: WebhookContext) -> NotificationDispatcher:
    return NotificationDispatcher(context)
