# feeds/services.py
import json
import logging

from django.db.models import Count
from rest_framework.exceptions import NotFound

from core.moderation import enforce_moderation
from follows.services import followee_ids
from .models import DEFAULT_CATEGORY, DEFAULT_THUMBNAIL_URL, Video

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 50


def parse_tags(value):
    if not value:
        return []
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            decoded = None
        value = decoded if isinstance(decoded, list) else value.split(",")
    return [str(tag).strip() for tag in value if str(tag).strip()]


def video_queryset():
    return Video.objects.select_related("author").annotate(
        like_count=Count("likes", distinct=True),
        comment_count=Count("comments", distinct=True),
    )


def list_videos(limit=DEFAULT_LIMIT, cursor=None, author_ids=None):
    queryset = video_queryset()
    if author_ids is not None:
        if not author_ids:
            return []
        queryset = queryset.filter(author_id__in=author_ids)
    if cursor is not None:
        queryset = queryset.filter(created_at__lt=cursor)
    return list(queryset.order_by("-created_at")[:limit])


def list_following_videos(user, limit=DEFAULT_LIMIT, cursor=None):
    return list_videos(limit=limit, cursor=cursor, author_ids=followee_ids(user))


def get_video(video_id):
    video = video_queryset().filter(pk=video_id).first()
    if video is None:
        raise NotFound("Video not found.")
    return video


def create_video(
    author,
    *,
    title,
    video_url,
    description=None,
    category=None,
    tags=None,
    thumbnail_url=None,
    duration_seconds=0,
):
    enforce_moderation(
        "upload",
        [("Title", title), ("Description", description)],
    )
    video = Video.objects.create(
        author=author,
        title=title.strip(),
        description=(description or "").strip() or None,
        video_url=video_url,
        thumbnail_url=thumbnail_url or DEFAULT_THUMBNAIL_URL,
        category=(category or DEFAULT_CATEGORY).strip().lower() or DEFAULT_CATEGORY,
        tags=parse_tags(tags),
        duration_seconds=duration_seconds or 0,
    )
    logger.info(f"@{author.handle} registered video {video.pk}")
    return get_video(video.pk)


def delete_video(video_id, owner):
    deleted, _ = Video.objects.filter(pk=video_id, author=owner).delete()
    if not deleted:
        raise NotFound("Video not found.")
    logger.info(f"@{owner.handle} deleted video {video_id}")
