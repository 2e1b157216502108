# messaging/models/threads.py
import uuid

from django.conf import settings
from django.db import models


class Thread(models.Model):
    """Conversation scoped to a fixed set of participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    subject = models.CharField(max_length=140, blank=True, null=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="created_threads",
    )
    participants = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="ThreadParticipant",
        related_name="message_threads",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now_add=True, db_index=True)
    last_sequence = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self):
        return self.subject or f"Thread {self.id}"


class ThreadParticipant(models.Model):
    thread = models.ForeignKey(
        Thread, on_delete=models.CASCADE, related_name="memberships"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="thread_memberships",
    )
    joined_at = models.DateTimeField(auto_now_add=True)
    last_read_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["thread", "user"], name="unique_thread_participant"
            ),
        ]

    def __str__(self):
        return f"{self.user} in {self.thread_id}"


class Message(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    thread = models.ForeignKey(
        Thread, on_delete=models.CASCADE, related_name="messages"
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    body = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    # Per-thread insertion number; breaks ties between equal timestamps.
    sequence = models.PositiveIntegerField()

    class Meta:
        ordering = ["created_at", "sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["thread", "sequence"], name="unique_thread_message_sequence"
            ),
        ]
        indexes = [
            models.Index(fields=["thread", "created_at"], name="message_thread_created_idx"),
        ]

    def __str__(self):
        return f"{self.sender} in {self.thread_id}: {self.body[:40]}"
