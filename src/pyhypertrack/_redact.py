"""Masking of credentials before they reach a log record.

Two kinds of secrets flow through pyhypertrack: the account credentials
used by the API client, and the SNS material on the webhook path.  An SNS
``SubscribeURL`` carries a one-time confirmation ``Token`` in its query
string and every SNS envelope carries a ``Signature``; anyone holding the
token can confirm (or hijack) the subscription, so neither may be logged.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

MASK = "<redacted>"

# Compared after lower-casing and folding "-" to "_".
_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "secret_key",
        "account_secret",
        "password",
        "authorization",
        "cookie",
        "token",
        "access_token",
        "signature",
        "x_amz_signature",
        "x_amz_security_token",
    }
)

# Query parameters masked inside URLs (SNS SubscribeURL/UnsubscribeURL, presigned URLs).
_SECRET_QUERY_PARAMS: frozenset[str] = frozenset({"token", "signature", "x_amz_signature", "x_amz_security_token"})

_MAX_DEPTH = 20


def _fold(name: str) -> str:
    return name.lower().replace("-", "_")


def redact_url(url: str) -> str:
    """Mask secret query parameters of *url*, keeping the rest readable.

    >>> redact_url("https://sns.us-west-2.amazonaws.com/?Action=ConfirmSubscription&Token=abc")
    'https://sns.us-west-2.amazonaws.com/?Action=ConfirmSubscription&Token=%3Credacted%3E'
    """
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (key, MASK if _fold(key) in _SECRET_QUERY_PARAMS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))


def _redact_text(value: str, max_string: int) -> str:
    if value.startswith(("http://", "https://")) and "?" in value:
        value = redact_url(value)
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated {len(value) - max_string} chars>"
    return value


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* that is safe to put in a log record.

    Mappings lose the values of credential keys, URLs lose their secret
    query parameters, long strings (SNS ``Message`` bodies are often
    whole event batches) are truncated and raw bytes are summarised.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        return _redact_text(value, max_string)

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        return {
            str(key): MASK
            if _fold(str(key)) in _SECRET_KEYS
            else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            for key, item in value.items()
        }

    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]

    # Unknown objects: their repr, without walking internals.
    return _redact_text(repr(value), max_string)
