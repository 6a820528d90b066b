"""Error reporting sink for the webhook.

Every validation failure and swallowed exception on the webhook path goes
through an :class:`ErrorReporter`, which logs it and then forwards it to
optional user callbacks (e.g. an error tracker).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pyhypertrack._redact import redact_for_log

_logger = logging.getLogger(__name__)

ErrorHandler = Callable[[str, Mapping[str, Any]], None]
ExceptionHandler = Callable[[BaseException, Mapping[str, Any]], None]


class ErrorReporter:
    """Log errors and exceptions, then hand them to pluggable callbacks."""

    def __init__(
        self,
        *,
        error_handler: ErrorHandler | None = None,
        exception_handler: ExceptionHandler | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.error_handler = error_handler
        self.exception_handler = exception_handler
        self._logger = logger or _logger

    def log_error(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        context = dict(context or {})
        self._logger.error("%s context=%s", message, redact_for_log(context))
        if self.error_handler is None:
            return
        try:
            self.error_handler(message, context)
        except Exception:
            self._logger.exception("error_handler failed for %r", message)

    def log_exception(self, exception: BaseException, context: Mapping[str, Any] | None = None) -> None:
        context = dict(context or {})
        self._logger.error(
            "%s: %s context=%s",
            type(exception).__name__,
            exception,
            redact_for_log(context),
            exc_info=exception,
        )
        if self.exception_handler is None:
            return
        try:
            self.exception_handler(exception, context)
        except Exception:
            self._logger.exception("exception_handler failed for %s", type(exception).__name__)
