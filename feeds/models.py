import uuid

from django.conf import settings
from django.db import models

DEFAULT_THUMBNAIL_URL = "https://placehold.co/640x360?text=Vessel"
DEFAULT_CATEGORY = "testimony"


def generate_video_id():
    return f"vid_{uuid.uuid4()}"


class Video(models.Model):
    """Video registered by URL and shown in the feeds"""
    id = models.CharField(
        primary_key=True, max_length=40, default=generate_video_id, editable=False
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="videos"
    )
    title = models.CharField(max_length=140)
    description = models.TextField(blank=True, null=True)
    video_url = models.URLField(max_length=1000)
    thumbnail_url = models.URLField(max_length=1000, default=DEFAULT_THUMBNAIL_URL)
    category = models.CharField(max_length=64, default=DEFAULT_CATEGORY)
    tags = models.JSONField(default=list, blank=True)
    duration_seconds = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['author', '-created_at'], name='video_author_created_idx'),
        ]

    def __str__(self):
        return f"{self.title} by {self.author}"

    def save(self, *args, **kwargs):
        self.category = (self.category or DEFAULT_CATEGORY).lower()
        if not self.thumbnail_url:
            self.thumbnail_url = DEFAULT_THUMBNAIL_URL
        super().save(*args, **kwargs)


class VideoLike(models.Model):
    video = models.ForeignKey(Video, on_delete=models.CASCADE, related_name="likes")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="video_likes"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['video', 'user'], name='unique_video_like'),
        ]

    def __str__(self):
        return f"{self.user} likes {self.video_id}"


class VideoComment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    video = models.ForeignKey(Video, on_delete=models.CASCADE, related_name="comments")
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="video_comments"
    )
    body = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['video', '-created_at'], name='comment_video_created_idx'),
        ]

    def __str__(self):
        return f"Comment by {self.author} on {self.video_id}"
