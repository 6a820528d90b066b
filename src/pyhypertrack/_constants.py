"""Internal constants shared across the library."""

from datetime import timedelta

BASE_URL = "https://v3.api.hypertrack.com"
USER_AGENT = "pyhypertrack"

# ------------------------------------------------------------------
# REST resources
# ------------------------------------------------------------------

RES_DEVICES = "/devices"
RES_DEVICE = "/devices/{device_id}"
RES_TRIPS = "/trips"
RES_TRIP = "/trips/{trip_id}"
RES_TRIP_COMPLETE = "/trips/{trip_id}/complete"

# ------------------------------------------------------------------
# Webhook (SNS) headers, normalized: lower-case, ``_`` separated
# ------------------------------------------------------------------

HEADER_MESSAGE_TYPE = "x_amz_sns_message_type"
HEADER_SUBSCRIPTION_ARN = "x_amz_sns_subscription_arn"
HEADER_MESSAGE_ID = "x_amz_sns_message_id"

MESSAGE_TYPE_CONFIRMATION = "SubscriptionConfirmation"
MESSAGE_TYPE_NOTIFICATION = "Notification"

# ------------------------------------------------------------------
# Trust store
# ------------------------------------------------------------------

DEFAULT_KEY_PREFIX = "/hypertrack_v3"
SUBSCRIPTION_ARN_KEY = "subscription_arn"

#: The trusted subscription never expires in practice.
SUBSCRIPTION_TTL = timedelta(days=365 * 100)
DEFAULT_REPLAY_TTL = timedelta(hours=1)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
