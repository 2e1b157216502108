from .threads import Message, Thread, ThreadParticipant
from .requests import MessageRequest

__all__ = [
    "Thread",
    "ThreadParticipant",
    "Message",
    "MessageRequest",
]
