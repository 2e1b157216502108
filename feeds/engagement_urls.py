from django.urls import path
from .views import (
    VideoCommentDeleteView,
    VideoCommentsView,
    VideoLikesListView,
    VideoLikeView,
)

urlpatterns = [
    path("<str:video_id>/like", VideoLikeView.as_view(), name="video-like"),
    path("<str:video_id>/likes", VideoLikesListView.as_view(), name="video-likes"),
    path("<str:video_id>/comments", VideoCommentsView.as_view(), name="video-comments"),
    path(
        "<str:video_id>/comments/<uuid:comment_id>",
        VideoCommentDeleteView.as_view(),
        name="video-comment-delete",
    ),
]
