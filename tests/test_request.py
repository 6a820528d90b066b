from __future__ import annotations

import io

from pyhypertrack.webhook.request import NotificationRequest, normalize_header_name


def test_normalize_header_name() -> None:
    assert normalize_header_name("X-Amz-Sns-Message-Type") == "x_amz_sns_message_type"
    assert normalize_header_name("HTTP_X_AMZ_SNS_MESSAGE_ID") == "x_amz_sns_message_id"
    assert normalize_header_name("x_amz_sns_subscription_arn") == "x_amz_sns_subscription_arn"


def test_build_normalizes_headers_and_encodes_body() -> None:
    request = NotificationRequest.build({"X-Amz-Sns-Message-Id": "m-1"}, "[]", {"a": "1"})

    assert request.headers == {"x_amz_sns_message_id": "m-1"}
    assert request.header("X-AMZ-SNS-MESSAGE-ID") == "m-1"
    assert request.params == {"a": "1"}
    assert request.body == b"[]"


def test_from_environ_keeps_only_http_headers() -> None:
    environ = {
        "REQUEST_METHOD": "POST",
        "CONTENT_TYPE": "text/plain",
        "CONTENT_LENGTH": "2",
        "QUERY_STRING": "source=sns&empty=",
        "HTTP_X_AMZ_SNS_MESSAGE_TYPE": "Notification",
        "HTTP_USER_AGENT": "Amazon Simple Notification Service Agent",
        "wsgi.input": io.BytesIO(b"[]trailing"),
    }

    request = NotificationRequest.from_environ(environ)

    assert request.headers == {
        "x_amz_sns_message_type": "Notification",
        "user_agent": "Amazon Simple Notification Service Agent",
    }
    assert request.params == {"source": "sns", "empty": ""}
    assert request.body == b"[]"


def test_from_environ_without_input() -> None:
    request = NotificationRequest.from_environ({"HTTP_X_AMZ_SNS_MESSAGE_TYPE": "Notification"})

    assert request.body == b""
    assert request.header("x-amz-sns-message-type") == "Notification"
