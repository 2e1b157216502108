# follows/models.py
from django.conf import settings
from django.db import models


class Follow(models.Model):
    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="following_edges"
    )
    followee = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="follower_edges"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["follower", "followee"], name="unique_follow_edge"
            ),
        ]
        indexes = [
            models.Index(fields=["followee", "follower"], name="follow_followee_idx"),
        ]

    def __str__(self):
        return f"{self.follower} -> {self.followee}"
