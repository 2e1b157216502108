from datetime import timedelta

import pytest
from django.utils import timezone

from feeds.models import Video
from notifications.models import Notification
from notifications.services import record_notification

pytestmark = pytest.mark.django_db


def test_self_notifications_are_not_recorded(make_user):
    grace = make_user("grace")

    assert record_notification(grace, grace, Notification.TYPE_FOLLOW) is None
    assert not Notification.objects.exists()


def test_unknown_type_is_rejected(make_user):
    with pytest.raises(ValueError):
        record_notification(make_user("grace"), make_user("ada"), "poke")


def test_comment_preview_is_truncated(make_user):
    grace, ada = make_user("grace"), make_user("ada")
    video = Video.objects.create(author=grace, title="Testimony", video_url="https://cdn.example.com/v.mp4")

    notification = record_notification(
        grace, ada, Notification.TYPE_COMMENT, video=video, comment_preview="x" * 400
    )

    assert len(notification.comment_preview) == 160
    assert notification.video_title == "Testimony"


def test_list_notifications(make_user, auth_client):
    grace, ada, linus = make_user("grace"), make_user("ada"), make_user("linus")
    video = Video.objects.create(author=grace, title="Testimony", video_url="https://cdn.example.com/v.mp4")
    record_notification(grace, ada, Notification.TYPE_FOLLOW)
    record_notification(grace, linus, Notification.TYPE_LIKE, video=video)
    record_notification(ada, linus, Notification.TYPE_FOLLOW)
    Notification.objects.filter(recipient=grace, type="follow").update(
        created_at=timezone.now() - timedelta(minutes=5)
    )

    response = auth_client(grace).get("/api/notifications/")

    assert response.status_code == 200
    notifications = response.data["notifications"]
    assert [n["type"] for n in notifications] == ["like", "follow"]
    assert notifications[0]["videoId"] == video.pk
    assert notifications[0]["videoTitle"] == "Testimony"
    assert notifications[0]["actor"]["handle"] == "linus"
    assert notifications[1]["videoId"] is None
    assert notifications[1]["commentPreview"] is None


def test_list_is_limited_to_fifty(make_user, auth_client):
    grace, ada = make_user("grace"), make_user("ada")
    Notification.objects.bulk_create(
        [Notification(recipient=grace, actor=ada, type="follow") for _ in range(55)]
    )

    response = auth_client(grace).get("/api/notifications/")

    assert len(response.data["notifications"]) == 50
