# notifications/models.py
import uuid

from django.conf import settings
from django.db import models


class Notification(models.Model):
    """Append-only activity event addressed to one user"""

    TYPE_FOLLOW = "follow"
    TYPE_LIKE = "like"
    TYPE_COMMENT = "comment"
    TYPE_CHOICES = [
        (TYPE_FOLLOW, "Follow"),
        (TYPE_LIKE, "Like"),
        (TYPE_COMMENT, "Comment"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications"
    )
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="+"
    )
    type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    video = models.ForeignKey(
        "feeds.Video", on_delete=models.CASCADE, null=True, blank=True, related_name="+"
    )
    video_title = models.CharField(max_length=140, blank=True, null=True)
    comment_preview = models.CharField(max_length=160, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "-created_at"], name="notification_recipient_idx"),
        ]

    def __str__(self):
        return f"{self.type} from {self.actor} to {self.recipient}"
