from django.urls import path
from .views import (
    CreatorVideosView,
    FollowingFeedView,
    ForYouFeedView,
    MyVideosView,
    VideoCreateView,
    VideoDeleteView,
)

urlpatterns = [
    path("for-you", ForYouFeedView.as_view(), name="feed-for-you"),
    path("following", FollowingFeedView.as_view(), name="feed-following"),
    path("mine", MyVideosView.as_view(), name="feed-mine"),
    path("profiles/<str:identifier>", CreatorVideosView.as_view(), name="feed-creator"),
    path("videos", VideoCreateView.as_view(), name="video-create"),
    path("videos/<str:video_id>", VideoDeleteView.as_view(), name="video-delete"),
]
