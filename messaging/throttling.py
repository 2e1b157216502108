from rest_framework.throttling import UserRateThrottle


class MessageRateThrottle(UserRateThrottle):
    """Limits message sends; the rate comes from DEFAULT_THROTTLE_RATES["messages"]."""

    scope = "messages"
