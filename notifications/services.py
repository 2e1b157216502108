# notifications/services.py
import logging

from .models import Notification

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 160
DEFAULT_LIMIT = 50


def record_notification(recipient, actor, type, video=None, comment_preview=None):
    """Store an activity event; self-notifications are never recorded."""
    if recipient is None or actor is None or recipient.pk == actor.pk:
        return None
    if type not in dict(Notification.TYPE_CHOICES):
        raise ValueError(f"Unknown notification type: {type}")

    preview = comment_preview[:PREVIEW_LENGTH] if comment_preview else None
    notification = Notification.objects.create(
        recipient=recipient,
        actor=actor,
        type=type,
        video=video,
        video_title=video.title if video is not None else None,
        comment_preview=preview,
    )
    logger.info(f"Recorded {type} notification for @{recipient.handle} from @{actor.handle}")
    return notification


def list_notifications(user, limit=DEFAULT_LIMIT):
    return list(
        Notification.objects.filter(recipient=user)
        .select_related("actor")
        .order_by("-created_at")[:limit]
    )
