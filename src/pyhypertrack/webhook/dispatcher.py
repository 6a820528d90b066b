"""Webhook notification dispatcher.

Entry point for every inbound delivery: routes on the SNS message type,
performs the subscription handshake, guards notifications against
untrusted subscriptions and replays, and fans event batches out to the
registered hooks.
"""

from __future__ import annotations

import hmac
import inspect
import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pyhypertrack._constants import (
    HEADER_MESSAGE_ID,
    HEADER_MESSAGE_TYPE,
    HEADER_SUBSCRIPTION_ARN,
    MESSAGE_TYPE_CONFIRMATION,
    MESSAGE_TYPE_NOTIFICATION,
    SUBSCRIPTION_TTL,
)
from pyhypertrack.models.event import Event, parse_event_batch
from pyhypertrack.webhook.confirmation import HttpConfirmationFetcher, extract_subscription_arn
from pyhypertrack.webhook.context import WebhookContext
from pyhypertrack.webhook.hooks import HookRegistry
from pyhypertrack.webhook.request import NotificationRequest
from pyhypertrack.webhook.response import ResponseEnvelope, serve

_logger = logging.getLogger(__name__)

ERR_MESSAGE_TYPE = "invalid message-type header"
ERR_SUBSCRIPTION_ARN = "invalid subscription-arn header"
ERR_MESSAGE_ID = "missing message-id header"
ERR_ARN_NOT_FOUND = "SubscriptionArn not found"
ERR_SUBSCRIBE_URL = "SubscribeURL not found"
ERR_CONFIRMATION_FAILED = "subscription confirmation failed"
ERR_INVALID_BODY = "invalid notification body"


def _tokens_match(presented: str | None, trusted: Any) -> bool:
    if not presented or not isinstance(trusted, str) or not trusted:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), trusted.encode("utf-8"))


class NotificationDispatcher:
    """Handle webhook deliveries for a single endpoint.

    Usage::

        dispatcher = NotificationDispatcher(WebhookContext(store=store))
        dispatcher.hooks.register("location", on_location)
        response = await dispatcher.call(request)

    Validation, parsing and confirmation-fetch failures are reported through
    the context's :class:`ErrorReporter` and answered with a 400 envelope.
    """

    def __init__(self, context: WebhookContext | None = None) -> None:
        self._ctx = context or WebhookContext()

    @property
    def context(self) -> WebhookContext:
        return self._ctx

    @property
    def hooks(self) -> HookRegistry:
        return self._ctx.hooks

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    async def call(self, request: NotificationRequest) -> ResponseEnvelope:
        message_type = request.header(HEADER_MESSAGE_TYPE)
        if message_type == MESSAGE_TYPE_CONFIRMATION:
            return await self.confirm_subscription(request)
        if message_type == MESSAGE_TYPE_NOTIFICATION:
            return await self.dispatch(request)

        self._ctx.reporter.log_error(ERR_MESSAGE_TYPE, {"message_type": message_type})
        return serve(400, {"error": ERR_MESSAGE_TYPE})

    # ------------------------------------------------------------------
    # Subscription confirmation
    # ------------------------------------------------------------------

    def _subscribe_url(self, request: NotificationRequest) -> str | None:
        try:
            payload = json.loads(request.body)
        except (ValueError, UnicodeDecodeError) as exc:
            self._ctx.reporter.log_exception(exc, {"stage": "subscription_confirmation"})
            return None
        url = payload.get("SubscribeURL") if isinstance(payload, dict) else None
        if not isinstance(url, str) or not url.strip():
            return None
        return url.strip()

    async def confirm_subscription(self, request: NotificationRequest) -> ResponseEnvelope:
        """Confirm the SNS subscription and trust its ARN from now on."""
        url = self._subscribe_url(request)
        if url is None:
            self._ctx.reporter.log_error(ERR_SUBSCRIBE_URL, {"stage": "subscription_confirmation"})
            return serve(400, {"error": ERR_SUBSCRIBE_URL})

        fetcher = self._ctx.fetcher
        if fetcher is None:
            fetcher = HttpConfirmationFetcher(timeout=self._ctx.config.confirmation_timeout)
        try:
            document = await fetcher.fetch(url)
        except (aiohttp.ClientError, TimeoutError, OSError, ValueError) as exc:
            self._ctx.reporter.log_exception(exc, {"subscribe_url": url})
            return serve(400, {"error": ERR_CONFIRMATION_FAILED})

        token = extract_subscription_arn(document)
        if not token:
            self._ctx.reporter.log_error(ERR_ARN_NOT_FOUND, {"subscribe_url": url})
            return serve(400, {"error": ERR_ARN_NOT_FOUND})

        await self._ctx.store.write(self._ctx.subscription_key, token, SUBSCRIPTION_TTL)
        _logger.info("Subscription confirmed arn=%s", token)
        return serve(200)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def _check_trust(self, request: NotificationRequest) -> ResponseEnvelope | None:
        presented = request.header(HEADER_SUBSCRIPTION_ARN)
        trusted = await self._ctx.store.fetch(self._ctx.subscription_key)
        if _tokens_match(presented, trusted):
            return None
        self._ctx.reporter.log_error(
            ERR_SUBSCRIPTION_ARN,
            {"subscription_arn": {"request": presented, "cache": trusted}},
        )
        return serve(400, {"error": ERR_SUBSCRIPTION_ARN})

    async def _check_replay(self, request: NotificationRequest) -> ResponseEnvelope | None:
        message_id = request.header(HEADER_MESSAGE_ID)
        if not message_id:
            self._ctx.reporter.log_error(ERR_MESSAGE_ID, {"sns_message_id": {"request": message_id}})
            return serve(400, {"error": ERR_MESSAGE_ID})

        key = self._ctx.message_key(message_id)
        # Claimed before dispatch so a concurrent duplicate loses the race.
        if await self._ctx.store.write_if_absent(key, True, self._ctx.config.replay_window):
            return None
        cached = await self._ctx.store.fetch(key)
        self._ctx.reporter.log_error(
            "Message Id already seen",
            {"sns_message_id": {"request": message_id, "cache": cached}},
        )
        return serve(400)

    async def dispatch(self, request: NotificationRequest) -> ResponseEnvelope:
        """Validate a notification and run its events through the hooks."""
        rejected = await self._check_trust(request)
        if rejected is None:
            rejected = await self._check_replay(request)
        if rejected is not None:
            return rejected

        try:
            events = parse_event_batch(request.body)
        except ValidationError as exc:
            self._ctx.reporter.log_exception(exc, {"sns_message_id": request.header(HEADER_MESSAGE_ID)})
            return serve(400, {"error": ERR_INVALID_BODY})

        result = True
        for event in events:
            ok = await self._invoke(event)
            result = result and ok

        _logger.debug("Dispatched %d events ok=%s", len(events), result)
        return serve(200 if result else 400)

    async def _invoke(self, event: Event) -> bool:
        hook = self._ctx.hooks.get(event.kind)
        if hook is None:
            _logger.warning("No hook for event type %r device_id=%s", event.type, event.device_id)
            return False
        try:
            outcome = hook(event.device_id, event.data, event.created_at, event.recorded_at)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as exc:
            self._ctx.reporter.log_exception(exc, {"event_type": event.type, "device_id": event.device_id})
            return False
        if not outcome:
            _logger.info("%s hook reported failure device_id=%s", event.type, event.device_id)
        return bool(outcome)
