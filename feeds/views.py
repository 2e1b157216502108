from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import OpenApiParameter, extend_schema
import logging

from core.pagination import parse_cursor, parse_limit
from users.serializers import UserSerializer
from users.services import find_by_handle_or_id
from . import engagement, services
from .serializers import (
    CommentCreateSerializer,
    CommentSerializer,
    VideoCreateSerializer,
    VideoSerializer,
)

logger = logging.getLogger(__name__)

PAGINATION_PARAMETERS = [
    OpenApiParameter("limit", int, description="1-50, default 20"),
    OpenApiParameter("cursor", str, description="ISO timestamp; videos created before it"),
]


class FeedMixin:
    """Shared query parsing and rendering for the feed listings"""

    def pagination(self, request):
        return {
            "limit": parse_limit(
                request.query_params.get("limit"),
                default=services.DEFAULT_LIMIT,
                maximum=services.MAX_LIMIT,
            ),
            "cursor": parse_cursor(request.query_params.get("cursor")),
        }

    def render(self, videos):
        return Response({"videos": VideoSerializer(videos, many=True).data})


class ForYouFeedView(FeedMixin, APIView):
    permission_classes = [AllowAny]

    @extend_schema(summary="For You Feed", tags=["Feed"], parameters=PAGINATION_PARAMETERS)
    def get(self, request):
        return self.render(services.list_videos(**self.pagination(request)))


class FollowingFeedView(FeedMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Following Feed", tags=["Feed"], parameters=PAGINATION_PARAMETERS)
    def get(self, request):
        return self.render(
            services.list_following_videos(request.user, **self.pagination(request))
        )


class MyVideosView(FeedMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="My Videos", tags=["Feed"], parameters=PAGINATION_PARAMETERS)
    def get(self, request):
        return self.render(
            services.list_videos(author_ids=[request.user.pk], **self.pagination(request))
        )


class CreatorVideosView(FeedMixin, APIView):
    permission_classes = [AllowAny]

    @extend_schema(summary="Creator Videos", tags=["Feed"], parameters=PAGINATION_PARAMETERS)
    def get(self, request, identifier):
        creator = find_by_handle_or_id(identifier)
        if creator is None:
            raise NotFound("Creator not found.")
        return self.render(
            services.list_videos(author_ids=[creator.pk], **self.pagination(request))
        )


class VideoCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        description="Register a video by URL",
        summary="Create Video",
        tags=["Feed"],
        request=VideoCreateSerializer,
        responses={201: VideoSerializer},
    )
    def post(self, request):
        serializer = VideoCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        video = services.create_video(request.user, **serializer.to_service_kwargs())
        return Response(
            {"video": VideoSerializer(video).data}, status=status.HTTP_201_CREATED
        )


class VideoDeleteView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Delete Video", tags=["Feed"], responses={204: None})
    def delete(self, request, video_id):
        services.delete_video(video_id, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class VideoLikeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Like Video", tags=["Engagement"])
    def post(self, request, video_id):
        return Response({"count": engagement.like_video(video_id, request.user)})

    @extend_schema(summary="Unlike Video", tags=["Engagement"])
    def delete(self, request, video_id):
        return Response({"count": engagement.unlike_video(video_id, request.user)})


class VideoLikesListView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(summary="List Likes", tags=["Engagement"])
    def get(self, request, video_id):
        count, users = engagement.list_likers(video_id)
        return Response({"count": count, "users": UserSerializer(users, many=True).data})


class VideoCommentsView(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(summary="List Comments", tags=["Engagement"])
    def get(self, request, video_id):
        comments = engagement.list_comments(video_id)
        return Response({"comments": CommentSerializer(comments, many=True).data})

    @extend_schema(
        summary="Add Comment",
        tags=["Engagement"],
        request=CommentCreateSerializer,
        responses={201: CommentSerializer},
    )
    def post(self, request, video_id):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = engagement.add_comment(
            video_id, request.user, serializer.validated_data["body"]
        )
        return Response(
            {"comment": CommentSerializer(comment).data}, status=status.HTTP_201_CREATED
        )


class VideoCommentDeleteView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Delete Comment", tags=["Engagement"], responses={204: None})
    def delete(self, request, video_id, comment_id):
        engagement.delete_comment(video_id, comment_id, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
