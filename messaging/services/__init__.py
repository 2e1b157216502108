from .threads import (
    SendOutcome,
    append_message,
    find_exact_thread,
    get_thread_summary,
    leave_thread,
    list_messages,
    send_message,
    thread_summaries_for,
)
from .requests import (
    accept_request,
    create_message_requests,
    decline_request,
    list_incoming_requests,
)

__all__ = [
    "SendOutcome",
    "send_message",
    "append_message",
    "find_exact_thread",
    "get_thread_summary",
    "leave_thread",
    "list_messages",
    "thread_summaries_for",
    "accept_request",
    "create_message_requests",
    "decline_request",
    "list_incoming_requests",
]
