"""Inbound webhook handling: SNS handshake, replay guard and event hooks."""

from pyhypertrack.webhook.confirmation import (
    ConfirmationFetcher,
    HttpConfirmationFetcher,
    extract_subscription_arn,
)
from pyhypertrack.webhook.context import WebhookContext
from pyhypertrack.webhook.dispatcher import NotificationDispatcher
from pyhypertrack.webhook.hooks import Hook, HookRegistry
from pyhypertrack.webhook.reporting import ErrorReporter
from pyhypertrack.webhook.request import NotificationRequest, normalize_header_name
from pyhypertrack.webhook.response import ResponseEnvelope
from pyhypertrack.webhook.server import add_webhook_route, create_app
from pyhypertrack.webhook.trust_store import MemoryTrustStore, TrustStore

__all__ = [
    "ConfirmationFetcher",
    "ErrorReporter",
    "Hook",
    "HookRegistry",
    "HttpConfirmationFetcher",
    "MemoryTrustStore",
    "NotificationDispatcher",
    "NotificationRequest",
    "ResponseEnvelope",
    "TrustStore",
    "WebhookContext",
    "add_webhook_route",
    "create_app",
    "extract_subscription_arn",
    "normalize_header_name",
]
