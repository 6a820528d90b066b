"""pyhypertrack - Async Python client and webhook receiver for the HyperTrack v3 API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyhypertrack")
except PackageNotFoundError:
    __version__ = "0+local"
from pyhypertrack.client import HypertrackClient
from pyhypertrack.config import HypertrackConfig
from pyhypertrack.exceptions import (
    HypertrackClientError,
    HypertrackConfigError,
    HypertrackError,
    HypertrackHttpError,
    HypertrackServerError,
    HypertrackTransportError,
    RegistrationError,
)
from pyhypertrack.models import Device, Event, EventType, Trip
from pyhypertrack.webhook import (
    ErrorReporter,
    HookRegistry,
    MemoryTrustStore,
    NotificationDispatcher,
    NotificationRequest,
    ResponseEnvelope,
    TrustStore,
    WebhookContext,
    create_app,
)

__all__ = [
    "__version__",
    "Device",
    "ErrorReporter",
    "Event",
    "EventType",
    "HookRegistry",
    "HypertrackClient",
    "HypertrackClientError",
    "HypertrackConfig",
    "HypertrackConfigError",
    "HypertrackError",
    "HypertrackHttpError",
    "HypertrackServerError",
    "HypertrackTransportError",
    "MemoryTrustStore",
    "NotificationDispatcher",
    "NotificationRequest",
    "RegistrationError",
    "ResponseEnvelope",
    "Trip",
    "TrustStore",
    "WebhookContext",
    "create_app",
]
