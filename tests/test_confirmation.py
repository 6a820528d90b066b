from __future__ import annotations

import json

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from conftest import ARN, CONFIRMATION_XML, RecordingReporter
from pyhypertrack.webhook.confirmation import HttpConfirmationFetcher, extract_subscription_arn
from pyhypertrack.webhook.context import WebhookContext
from pyhypertrack.webhook.dispatcher import NotificationDispatcher
from pyhypertrack.webhook.request import NotificationRequest
from pyhypertrack.webhook.trust_store import MemoryTrustStore


def test_extracts_arn_ignoring_namespace() -> None:
    assert extract_subscription_arn(CONFIRMATION_XML) == ARN


def test_extracts_arn_from_bytes_without_namespace() -> None:
    document = b"<Root><Nested><SubscriptionArn>arn:aws:sns:x</SubscriptionArn></Nested></Root>"
    assert extract_subscription_arn(document) == "arn:aws:sns:x"


def test_prefixed_namespace_is_ignored() -> None:
    document = '<a:Root xmlns:a="urn:a"><a:SubscriptionArn>arn:aws:sns:y</a:SubscriptionArn></a:Root>'
    assert extract_subscription_arn(document) == "arn:aws:sns:y"


@pytest.mark.parametrize(
    "document",
    [
        "<Root/>",
        "<Root><SubscriptionArn/></Root>",
        "<Root><SubscriptionArn>   </SubscriptionArn></Root>",
        "not xml at all",
        "",
    ],
)
def test_missing_or_empty_arn(document: str) -> None:
    assert extract_subscription_arn(document) is None


def test_entity_expansion_is_refused() -> None:
    document = (
        '<?xml version="1.0"?>'
        '<!DOCTYPE r [<!ENTITY a "arn">]>'
        "<r><SubscriptionArn>&a;</SubscriptionArn></r>"
    )
    assert extract_subscription_arn(document) is None


# ------------------------------------------------------------------
# HTTP fetcher
# ------------------------------------------------------------------


async def _confirm(request: web.Request) -> web.Response:
    if request.query.get("Token") != "good":
        return web.Response(status=403, text="<Error/>")
    return web.Response(text=CONFIRMATION_XML, content_type="text/xml")


@pytest.mark.asyncio
async def test_http_fetcher_returns_document() -> None:
    app = web.Application()
    app.router.add_get("/", _confirm)
    server = TestServer(app)
    await server.start_server()
    try:
        fetcher = HttpConfirmationFetcher(timeout=5.0)
        document = await fetcher.fetch(f"http://{server.host}:{server.port}/?Token=good")
        assert extract_subscription_arn(document) == ARN

        async with aiohttp.ClientSession() as session:
            shared = HttpConfirmationFetcher(session=session, timeout=5.0)
            with pytest.raises(aiohttp.ClientResponseError):
                await shared.fetch(f"http://{server.host}:{server.port}/?Token=bad")
    finally:
        await server.close()


async def _undecodable(_request: web.Request) -> web.Response:
    return web.Response(body=b"\xff\xfe<bad", content_type="text/xml", charset="utf-8")


async def _latin1(_request: web.Request) -> web.Response:
    document = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>'
        "<ConfirmSubscriptionResponse><ConfirmSubscriptionResult>"
        "<SubscriptionArn>arn:aws:sns:eu-west-1:000000000000:flotte-\xe9t\xe9</SubscriptionArn>"
        "</ConfirmSubscriptionResult></ConfirmSubscriptionResponse>"
    ).encode("latin-1")
    return web.Response(body=document, content_type="text/xml")


@pytest.mark.asyncio
async def test_confirmation_bodies_are_parsed_as_bytes(store: MemoryTrustStore, reporter: RecordingReporter) -> None:
    app = web.Application()
    app.router.add_get("/undecodable", _undecodable)
    app.router.add_get("/latin1", _latin1)
    server = TestServer(app)
    await server.start_server()
    try:
        dispatcher = NotificationDispatcher(
            WebhookContext(store=store, reporter=reporter, fetcher=HttpConfirmationFetcher(timeout=5.0))
        )

        def _request(path: str) -> NotificationRequest:
            return NotificationRequest.build(
                {"X-Amz-Sns-Message-Type": "SubscriptionConfirmation"},
                json.dumps({"SubscribeURL": f"http://{server.host}:{server.port}{path}"}),
            )

        rejected = await dispatcher.call(_request("/undecodable"))
        assert rejected.status == 400
        assert rejected.body == {"error": "SubscriptionArn not found"}
        assert await store.fetch("/hypertrack_v3/subscription_arn") is None

        accepted = await dispatcher.call(_request("/latin1"))
        assert accepted.status == 200
        assert await store.fetch("/hypertrack_v3/subscription_arn") == "arn:aws:sns:eu-west-1:000000000000:flotte-\xe9t\xe9"
    finally:
        await server.close()
