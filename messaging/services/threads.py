# messaging/services/threads.py
"""
Thread reconciliation and presentation.

``send_message`` decides between appending to the thread whose participant
set matches the recipients exactly, gating non-mutual recipients behind
message requests, and opening a fresh thread.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from typing import Iterable, List, Optional
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import (
    Count,
    DateTimeField,
    IntegerField,
    OuterRef,
    Prefetch,
    Q,
    Subquery,
    Value,
)
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.moderation import enforce_moderation
from follows.services import is_mutual_follow
from ..exceptions import ConversationNotFound, NoRecipientsProvided, NoValidRecipients
from ..models import Message, MessageRequest, Thread, ThreadParticipant

logger = logging.getLogger(__name__)
User = get_user_model()

EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)
THREAD_LIST_LIMIT = 25
DEFAULT_MESSAGE_LIMIT = 50
MAX_MESSAGE_LIMIT = 200

APPENDED = "appended"
CREATED = "created"
REQUESTED = "requested"


@dataclass
class SendOutcome:
    kind: str
    thread: Optional[Thread] = None
    requests: List[MessageRequest] = field(default_factory=list)


def normalize_handles(handles: Iterable[str]) -> List[str]:
    seen = []
    for handle in handles:
        normalized = (handle or "").strip().lstrip("@").lower()
        if normalized and normalized not in seen:
            seen.append(normalized)
    return seen


def resolve_recipients(sender, handles) -> List[User]:
    normalized = normalize_handles(handles)
    if not normalized:
        raise NoRecipientsProvided()

    by_handle = {
        user.handle: user for user in User.objects.filter(handle__in=normalized)
    }
    recipients = [
        by_handle[handle]
        for handle in normalized
        if handle in by_handle and by_handle[handle].pk != sender.pk
    ]
    if not recipients:
        raise NoValidRecipients()
    return recipients


def find_exact_thread(user_ids) -> Optional[Thread]:
    """Most recently updated thread whose participant set equals ``user_ids``."""
    ids = set(user_ids)
    if not ids:
        return None
    anchor = next(iter(ids))
    return (
        Thread.objects.filter(
            pk__in=ThreadParticipant.objects.filter(user_id=anchor).values("thread_id")
        )
        .annotate(
            participant_count=Count("memberships", distinct=True),
            matching_count=Count(
                "memberships",
                filter=Q(memberships__user_id__in=ids),
                distinct=True,
            ),
        )
        .filter(participant_count=len(ids), matching_count=len(ids))
        .order_by("-updated_at")
        .first()
    )


def insert_message(thread_id, sender, body) -> Message:
    """Insert the next message of a thread; caller must be inside a transaction."""
    thread = Thread.objects.select_for_update().get(pk=thread_id)
    thread.last_sequence += 1
    message = Message.objects.create(
        thread=thread,
        sender=sender,
        body=body,
        sequence=thread.last_sequence,
    )
    thread.updated_at = message.created_at
    thread.save(update_fields=["last_sequence", "updated_at"])
    ThreadParticipant.objects.filter(thread=thread, user=sender).update(
        last_read_at=message.created_at
    )
    return message


def create_thread(sender, recipients, body, subject=None) -> Thread:
    with transaction.atomic():
        thread = Thread.objects.create(subject=subject or None, created_by=sender)
        ThreadParticipant.objects.bulk_create(
            [ThreadParticipant(thread=thread, user=sender, last_read_at=timezone.now())]
            + [ThreadParticipant(thread=thread, user=user) for user in recipients]
        )
        insert_message(thread.pk, sender, body)
    logger.info(
        f"Thread {thread.pk} created by @{sender.handle} with "
        f"{', '.join('@' + user.handle for user in recipients)}"
    )
    return thread


def send_message(sender, handles, body, subject=None) -> SendOutcome:
    from .requests import create_message_requests

    recipients = resolve_recipients(sender, handles)
    body = (body or "").strip()
    subject = (subject or "").strip() or None
    enforce_moderation("message", [("Message", body), ("Subject", subject)])

    existing = find_exact_thread([sender.pk] + [user.pk for user in recipients])
    if existing is not None:
        with transaction.atomic():
            insert_message(existing.pk, sender, body)
        return SendOutcome(APPENDED, thread=get_thread_summary(existing.pk, sender))

    gated = [user for user in recipients if not is_mutual_follow(sender, user)]
    if gated:
        requests = create_message_requests(sender, gated, body)
        if requests:
            return SendOutcome(REQUESTED, requests=requests)

    thread = create_thread(sender, recipients, body, subject)
    return SendOutcome(CREATED, thread=get_thread_summary(thread.pk, sender))


def _membership(thread_id, user) -> ThreadParticipant:
    membership = ThreadParticipant.objects.filter(thread_id=thread_id, user=user).first()
    if membership is None:
        raise ConversationNotFound()
    return membership


def append_message(thread_id, user, body) -> Message:
    _membership(thread_id, user)
    body = (body or "").strip()
    enforce_moderation("message", [("Message", body)])
    with transaction.atomic():
        message = insert_message(thread_id, user, body)
    return Message.objects.select_related("sender").get(pk=message.pk)


def list_messages(thread_id, user, limit=DEFAULT_MESSAGE_LIMIT, before=None) -> List[Message]:
    """Newest ``limit`` messages (older than ``before``) in ascending order; marks the thread read."""
    membership = _membership(thread_id, user)
    queryset = Message.objects.filter(thread_id=thread_id).select_related("sender")
    if before is not None:
        queryset = queryset.filter(created_at__lt=before)
    messages = list(queryset.order_by("-created_at", "-sequence")[:limit])
    messages.reverse()

    ThreadParticipant.objects.filter(pk=membership.pk).update(last_read_at=timezone.now())
    return messages


def leave_thread(thread_id, user) -> None:
    with transaction.atomic():
        deleted, _ = ThreadParticipant.objects.filter(thread_id=thread_id, user=user).delete()
        if not deleted:
            raise ConversationNotFound()
        if not ThreadParticipant.objects.filter(thread_id=thread_id).exists():
            Thread.objects.filter(pk=thread_id).delete()
            logger.info(f"Thread {thread_id} deleted after its last participant left")


def _summary_queryset(user):
    viewer_last_read = ThreadParticipant.objects.filter(
        thread=OuterRef("pk"), user=user
    ).values("last_read_at")[:1]
    unread = (
        Message.objects.filter(
            thread=OuterRef("pk"),
            created_at__gt=Coalesce(
                OuterRef("viewer_last_read_at"),
                Value(EPOCH, output_field=DateTimeField()),
            ),
        )
        .exclude(sender=user)
        .order_by()
        .values("thread")
        .annotate(total=Count("pk"))
        .values("total")
    )
    last_message = (
        Message.objects.filter(thread=OuterRef("pk"))
        .order_by("-created_at", "-sequence")
        .values("pk")[:1]
    )
    return (
        Thread.objects.filter(memberships__user=user)
        .annotate(
            viewer_last_read_at=Subquery(viewer_last_read, output_field=DateTimeField()),
        )
        .annotate(
            unread_count=Coalesce(
                Subquery(unread, output_field=IntegerField()), Value(0)
            ),
            last_message_id=Subquery(last_message),
        )
        .prefetch_related(
            Prefetch("participants", queryset=User.objects.order_by("handle"))
        )
    )


def _attach_last_messages(threads):
    ids = [thread.last_message_id for thread in threads if thread.last_message_id]
    messages = Message.objects.select_related("sender").in_bulk(ids)
    for thread in threads:
        thread.last_message = messages.get(thread.last_message_id)
    return threads


def thread_summaries_for(user, limit=THREAD_LIST_LIMIT) -> List[Thread]:
    threads = list(_summary_queryset(user).order_by("-updated_at")[:limit])
    return _attach_last_messages(threads)


def get_thread_summary(thread_id, user) -> Thread:
    thread = _summary_queryset(user).filter(pk=thread_id).first()
    if thread is None:
        raise ConversationNotFound()
    return _attach_last_messages([thread])[0]
