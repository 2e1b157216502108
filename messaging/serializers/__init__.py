from .threads import (
    AppendMessageSerializer,
    MessageSerializer,
    SendMessageSerializer,
    ThreadSummarySerializer,
)
from .requests import MessageRequestSerializer

__all__ = [
    "AppendMessageSerializer",
    "MessageSerializer",
    "SendMessageSerializer",
    "ThreadSummarySerializer",
    "MessageRequestSerializer",
]
