# feeds/engagement.py
"""Likes and comments on feed videos."""
import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound

from core.moderation import enforce_moderation
from notifications.models import Notification
from notifications.services import record_notification
from .models import Video, VideoComment, VideoLike

logger = logging.getLogger(__name__)

LIST_LIMIT = 100


def _video_or_404(video_id):
    video = Video.objects.select_related("author").filter(pk=video_id).first()
    if video is None:
        raise NotFound("Video not found.")
    return video


def like_count(video_id):
    return VideoLike.objects.filter(video_id=video_id).count()


def like_video(video_id, user):
    video = _video_or_404(video_id)
    try:
        with transaction.atomic():
            _, created = VideoLike.objects.get_or_create(video=video, user=user)
    except IntegrityError:
        created = False
    if created:
        record_notification(video.author, user, Notification.TYPE_LIKE, video=video)
    return like_count(video.pk)


def unlike_video(video_id, user):
    video = _video_or_404(video_id)
    VideoLike.objects.filter(video=video, user=user).delete()
    return like_count(video.pk)


def list_likers(video_id, limit=LIST_LIMIT):
    video = _video_or_404(video_id)
    likes = (
        VideoLike.objects.filter(video=video)
        .select_related("user")
        .order_by("-created_at")[:limit]
    )
    return like_count(video.pk), [like.user for like in likes]


def list_comments(video_id, limit=LIST_LIMIT):
    video = _video_or_404(video_id)
    return list(
        VideoComment.objects.filter(video=video)
        .select_related("author")
        .order_by("-created_at")[:limit]
    )


def add_comment(video_id, user, body):
    video = _video_or_404(video_id)
    body = body.strip()
    enforce_moderation("comment", [("Comment", body)])
    comment = VideoComment.objects.create(video=video, author=user, body=body)
    record_notification(
        video.author,
        user,
        Notification.TYPE_COMMENT,
        video=video,
        comment_preview=body,
    )
    logger.info(f"@{user.handle} commented on {video.pk}")
    return comment


def delete_comment(video_id, comment_id, user):
    deleted, _ = VideoComment.objects.filter(
        pk=comment_id, video_id=video_id, author=user
    ).delete()
    if not deleted:
        raise NotFound("Comment not found.")
