from datetime import timedelta

import pytest
from django.utils import timezone

from feeds.models import DEFAULT_THUMBNAIL_URL, Video

pytestmark = pytest.mark.django_db

VIDEO_URL = "https://cdn.example.com/video.mp4"


@pytest.fixture
def grace(make_user):
    return make_user("grace")


@pytest.fixture
def make_video():
    def _make_video(author, title="A testimony", minutes_ago=0, **extra):
        video = Video.objects.create(author=author, title=title, video_url=VIDEO_URL, **extra)
        if minutes_ago:
            Video.objects.filter(pk=video.pk).update(
                created_at=timezone.now() - timedelta(minutes=minutes_ago)
            )
        return video

    return _make_video


def titles(response):
    return [video["title"] for video in response.data["videos"]]


def test_register_video_by_url(grace, auth_client):
    response = auth_client(grace).post(
        "/api/feed/videos",
        {
            "title": "Sunday worship",
            "description": "Recorded live",
            "category": "Worship",
            "tags": "praise, live ,,",
            "videoUrl": VIDEO_URL,
            "durationSeconds": 95,
        },
        format="json",
    )

    assert response.status_code == 201
    video = response.data["video"]
    assert video["id"].startswith("vid_")
    assert video["category"] == "worship"
    assert video["tags"] == ["praise", "live"]
    assert video["thumbnailUrl"] == DEFAULT_THUMBNAIL_URL
    assert video["durationSeconds"] == 95
    assert video["stats"] == {"likes": 0, "comments": 0}
    assert video["user"]["handle"] == "grace"


def test_register_video_defaults(grace, auth_client):
    response = auth_client(grace).post(
        "/api/feed/videos",
        {"title": "Quick word", "videoUrl": VIDEO_URL, "tags": '["hope", " faith "]'},
        format="json",
    )

    video = response.data["video"]
    assert video["category"] == "testimony"
    assert video["tags"] == ["hope", "faith"]
    assert video["durationSeconds"] == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "ab", "videoUrl": VIDEO_URL},
        {"title": "Fine title"},
        {"title": "Fine title", "videoUrl": "not a url"},
        {"title": "Fine title", "videoUrl": VIDEO_URL, "durationSeconds": -1},
        {"title": "Fine title", "videoUrl": VIDEO_URL, "tags": 5},
    ],
)
def test_register_video_validation(payload, grace, auth_client):
    response = auth_client(grace).post("/api/feed/videos", payload, format="json")

    assert response.status_code == 400
    assert not Video.objects.exists()


def test_register_video_is_moderated(grace, auth_client):
    response = auth_client(grace).post(
        "/api/feed/videos",
        {"title": "Clean title", "description": "double your money fast", "videoUrl": VIDEO_URL},
        format="json",
    )

    assert response.status_code == 400
    assert response.data["detail"] == "Spam and scams are not allowed (Description)."
    assert not Video.objects.exists()


def test_for_you_is_public_and_newest_first(grace, make_video, api_client):
    make_video(grace, "oldest", minutes_ago=30)
    make_video(grace, "middle", minutes_ago=20)
    make_video(grace, "newest", minutes_ago=10)

    response = api_client.get("/api/feed/for-you")

    assert response.status_code == 200
    assert titles(response) == ["newest", "middle", "oldest"]


def test_feed_limit_and_cursor(grace, make_video, api_client):
    make_video(grace, "oldest", minutes_ago=30)
    middle = make_video(grace, "middle", minutes_ago=20)
    make_video(grace, "newest", minutes_ago=10)
    middle.refresh_from_db()

    first_page = api_client.get("/api/feed/for-you", {"limit": 2})
    after_middle = api_client.get(
        "/api/feed/for-you", {"cursor": middle.created_at.isoformat()}
    )
    garbage_cursor = api_client.get("/api/feed/for-you", {"cursor": "yesterday-ish", "limit": 0})

    assert titles(first_page) == ["newest", "middle"]
    assert titles(after_middle) == ["oldest"]
    assert titles(garbage_cursor) == ["newest", "middle", "oldest"]


def test_following_feed(grace, make_user, make_video, follow, auth_client):
    ada, linus = make_user("ada"), make_user("linus")
    follow(grace, ada)
    make_video(ada, "from ada")
    make_video(linus, "from linus")
    make_video(grace, "from grace")

    response = auth_client(grace).get("/api/feed/following")

    assert titles(response) == ["from ada"]
    assert auth_client(linus).get("/api/feed/following").data == {"videos": []}


def test_mine_and_creator_profiles(grace, make_user, make_video, auth_client, api_client):
    ada = make_user("ada")
    make_video(grace, "grace one")
    make_video(ada, "ada one")

    assert titles(auth_client(grace).get("/api/feed/mine")) == ["grace one"]
    assert titles(api_client.get("/api/feed/profiles/@ada")) == ["ada one"]
    assert titles(api_client.get(f"/api/feed/profiles/{ada.pk}")) == ["ada one"]
    assert api_client.get("/api/feed/profiles/nobody").status_code == 404


def test_feed_stats_count_engagement(grace, make_user, make_video, api_client):
    ada = make_user("ada")
    video = make_video(grace)
    video.likes.create(user=ada)
    video.likes.create(user=grace)
    video.comments.create(author=ada, body="Amen")

    [listed] = api_client.get("/api/feed/for-you").data["videos"]

    assert listed["stats"] == {"likes": 2, "comments": 1}


def test_delete_video_owner_only(grace, make_user, make_video, auth_client):
    video = make_video(grace)

    assert auth_client(make_user("ada")).delete(f"/api/feed/videos/{video.pk}").status_code == 404
    assert auth_client(grace).delete(f"/api/feed/videos/{video.pk}").status_code == 204
    assert not Video.objects.exists()


def test_private_feeds_require_authentication(api_client):
    assert api_client.get("/api/feed/following").status_code == 401
    assert api_client.get("/api/feed/mine").status_code == 401
    assert api_client.post("/api/feed/videos", {}, format="json").status_code == 401
