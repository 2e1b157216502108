# follows/services.py
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from notifications.models import Notification
from notifications.services import record_notification
from .models import Follow

logger = logging.getLogger(__name__)
User = get_user_model()


def stats_cache_key(user_id):
    return f"follow_stats_{user_id}"


def invalidate_stats(*user_ids):
    cache.delete_many([stats_cache_key(user_id) for user_id in user_ids])


def follow(follower, followee):
    """Create the edge if missing; returns True when a new edge was stored."""
    if follower.pk == followee.pk:
        raise ValidationError({"detail": "You cannot follow yourself."})

    try:
        with transaction.atomic():
            _, created = Follow.objects.get_or_create(follower=follower, followee=followee)
    except IntegrityError:
        created = False

    if created:
        invalidate_stats(follower.pk, followee.pk)
        logger.info(f"@{follower.handle} followed @{followee.handle}")
        record_notification(followee, follower, Notification.TYPE_FOLLOW)
    return created


def unfollow(follower, followee):
    deleted, _ = Follow.objects.filter(follower=follower, followee=followee).delete()
    if deleted:
        invalidate_stats(follower.pk, followee.pk)
        logger.info(f"@{follower.handle} unfollowed @{followee.handle}")
    return bool(deleted)


def is_following(follower, followee):
    return Follow.objects.filter(follower=follower, followee=followee).exists()


def is_mutual_follow(a, b):
    if a.pk == b.pk:
        return False
    return is_following(a, b) and is_following(b, a)


def followee_ids(user):
    return list(
        Follow.objects.filter(follower=user).values_list("followee_id", flat=True)
    )


def list_following(user):
    return list(
        User.objects.filter(follower_edges__follower=user).order_by("-follower_edges__created_at")
    )


def list_followers(user):
    return list(
        User.objects.filter(following_edges__followee=user).order_by("-following_edges__created_at")
    )


def list_mutual(user):
    return list(
        User.objects.filter(follower_edges__follower=user)
        .filter(following_edges__followee=user)
        .distinct()
        .order_by("handle")
    )


def get_stats(user):
    key = stats_cache_key(user.pk)
    stats = cache.get(key)
    if stats is None:
        stats = {
            "followers": Follow.objects.filter(followee=user).count(),
            "following": Follow.objects.filter(follower=user).count(),
        }
        cache.set(key, stats, timeout=settings.FOLLOW_STATS_CACHE_TIMEOUT)
    return stats
