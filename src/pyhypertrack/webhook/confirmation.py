"""Subscription confirmation fetch and SNS response parsing."""

from __future__ import annotations

import logging
from typing import Protocol
from xml.etree.ElementTree import ParseError

import aiohttp
from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from pyhypertrack._constants import USER_AGENT

_logger = logging.getLogger(__name__)

_ARN_ELEMENT = "SubscriptionArn"


class ConfirmationFetcher(Protocol):
    """Fetches the body behind a ``SubscribeURL``."""

    async def fetch(self, url: str) -> str | bytes:
        ...


class HttpConfirmationFetcher:
    """GET the confirmation URL with a bounded timeout.

    Uses the given session when provided, otherwise opens a short-lived
    one per call.  The raw body is returned undecoded; the XML parser
    honours its declared encoding.  Non-2xx answers raise
    :class:`aiohttp.ClientResponseError`.
    """

    def __init__(self, *, session: aiohttp.ClientSession | None = None, timeout: float = 10.0) -> None:
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _get(self, session: aiohttp.ClientSession, url: str) -> bytes:
        async with session.get(url, timeout=self._timeout, headers={"user-agent": USER_AGENT}) as resp:
            resp.raise_for_status()
            return await resp.read()

    async def fetch(self, url: str) -> bytes:
        _logger.debug("GET %s", url)
        if self._session is not None:
            return await self._get(self._session, url)
        async with aiohttp.ClientSession() as session:
            return await self._get(session, url)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def extract_subscription_arn(document: str | bytes) -> str | None:
    """Return the text of the first ``SubscriptionArn`` element, ignoring namespaces.

    Returns ``None`` when the element is missing or empty, or when the
    document is not well-formed (or unsafe) XML.
    """
    try:
        root = DefusedET.fromstring(document)
    except (ParseError, DefusedXmlException, ValueError) as exc:
        _logger.debug("Confirmation response is not usable XML: %s", exc)
        return None
    for element in root.iter():
        if _local_name(element.tag) == _ARN_ELEMENT:
            token = (element.text or "").strip()
            return token or None
    return None
