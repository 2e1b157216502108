# messaging/services/requests.py
import logging
from typing import List

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from ..exceptions import (
    MessageRequestForbidden,
    MessageRequestNotFound,
    MessageRequestResolved,
)
from ..models import MessageRequest
from .threads import insert_message, create_thread, find_exact_thread, get_thread_summary

logger = logging.getLogger(__name__)


def create_message_requests(sender, recipients, body) -> List[MessageRequest]:
    """One pending request per recipient; a failing recipient is logged and skipped."""
    created = []
    for recipient in recipients:
        try:
            with transaction.atomic():
                created.append(
                    MessageRequest.objects.create(
                        sender=sender, recipient=recipient, body=body
                    )
                )
        except Exception as e:
            logger.warning(
                f"Could not create message request from @{sender.handle} "
                f"to @{recipient.handle}: {str(e)}",
                exc_info=True,
            )
    if created:
        logger.info(f"@{sender.handle} sent {len(created)} message request(s)")
    return created


def _locked_pending_request(request_id, user) -> MessageRequest:
    message_request = (
        MessageRequest.objects.select_for_update(of=("self",))
        .select_related("sender", "recipient")
        .filter(pk=request_id)
        .first()
    )
    if message_request is None:
        raise MessageRequestNotFound()
    if message_request.recipient_id != user.pk:
        raise MessageRequestForbidden()
    if not message_request.is_pending:
        raise MessageRequestResolved()
    return message_request


def accept_request(request_id, user):
    """
    Accept a pending request and return the summary of the pair's thread.

    Every pending request between the same two users, in either direction,
    is accepted along with it. Their bodies become messages from their
    original senders, appended in the order the requests were created.
    """
    with transaction.atomic():
        message_request = _locked_pending_request(request_id, user)
        sender, recipient = message_request.sender, message_request.recipient

        accepted = list(
            MessageRequest.objects.select_for_update(of=("self",))
            .select_related("sender", "recipient")
            .filter(status=MessageRequest.STATUS_PENDING)
            .filter(
                Q(sender=sender, recipient=recipient)
                | Q(sender=recipient, recipient=sender)
            )
            .order_by("created_at", "pk")
        )
        pending = list(accepted)

        thread = find_exact_thread([sender.pk, recipient.pk])
        if thread is None:
            first = pending.pop(0)
            thread = create_thread(first.sender, [first.recipient], first.body)

        for pending_request in pending:
            insert_message(thread.pk, pending_request.sender, pending_request.body)

        MessageRequest.objects.filter(
            pk__in=[pending_request.pk for pending_request in accepted]
        ).update(status=MessageRequest.STATUS_ACCEPTED, resolved_at=timezone.now())

    logger.info(
        f"@{recipient.handle} accepted message request {message_request.pk} "
        f"from @{sender.handle} into thread {thread.pk}"
    )
    return get_thread_summary(thread.pk, user)


def decline_request(request_id, user) -> None:
    with transaction.atomic():
        message_request = _locked_pending_request(request_id, user)
        message_request.status = MessageRequest.STATUS_DECLINED
        message_request.resolved_at = timezone.now()
        message_request.save(update_fields=["status", "resolved_at"])
    logger.info(f"@{user.handle} declined message request {message_request.pk}")


def list_incoming_requests(user) -> List[MessageRequest]:
    return list(
        MessageRequest.objects.filter(
            recipient=user, status=MessageRequest.STATUS_PENDING
        )
        .select_related("sender")
        .order_by("-created_at")
    )
