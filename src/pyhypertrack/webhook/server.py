"""aiohttp endpoint serving the webhook dispatcher."""

from __future__ import annotations

import logging

from aiohttp import web

from pyhypertrack.webhook.dispatcher import NotificationDispatcher
from pyhypertrack.webhook.request import NotificationRequest

_logger = logging.getLogger(__name__)

DEFAULT_PATH = "/hypertrack"

DISPATCHER_KEY = web.AppKey("dispatcher", NotificationDispatcher)


async def handle_webhook(request: web.Request) -> web.Response:
    dispatcher = request.app[DISPATCHER_KEY]
    notification = await NotificationRequest.from_aiohttp(request)
    envelope = await dispatcher.call(notification)
    _logger.debug("Webhook %s -> %s", request.path, envelope.status)
    return web.Response(
        status=envelope.status,
        text=envelope.to_json(),
        headers=envelope.headers,
    )


def add_webhook_route(
    app: web.Application,
    dispatcher: NotificationDispatcher,
    *,
    path: str = DEFAULT_PATH,
) -> None:
    """Mount *dispatcher* as a POST route on an existing application."""
    app[DISPATCHER_KEY] = dispatcher
    app.router.add_post(path, handle_webhook)


def create_app(dispatcher: NotificationDispatcher, *, path: str = DEFAULT_PATH) -> web.Application:
    app = web.Application()
    add_webhook_route(app, dispatcher, path=path)
    return app
