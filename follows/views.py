# follows/views.py
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from users.serializers import UserSerializer
from users.services import find_by_handle, find_by_handle_or_id
from . import services


def _resolve_handle(handle):
    user = find_by_handle(handle)
    if user is None:
        raise NotFound("User not found.")
    return user


class FollowView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Follow User", tags=["Follows"], responses={204: None})
    def post(self, request, handle):
        services.follow(request.user, _resolve_handle(handle))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(summary="Unfollow User", tags=["Follows"], responses={204: None})
    def delete(self, request, handle):
        services.unfollow(request.user, _resolve_handle(handle))
        return Response(status=status.HTTP_204_NO_CONTENT)


class FollowListView(APIView):
    """Lists one side of the caller's follow graph; ``relation`` picks which."""

    permission_classes = [IsAuthenticated]
    relation = None

    loaders = {
        "following": services.list_following,
        "followers": services.list_followers,
        "mutual": services.list_mutual,
    }

    @extend_schema(tags=["Follows"], responses={200: UserSerializer(many=True)})
    def get(self, request):
        users = self.loaders[self.relation](request.user)
        return Response({self.relation: UserSerializer(users, many=True).data})


class FollowStatsView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        description="Follower and following counts for a handle or user id",
        summary="Follow Stats",
        tags=["Follows"],
    )
    def get(self, request, identifier):
        user = find_by_handle_or_id(identifier)
        if user is None:
            raise NotFound("User not found.")
        return Response(services.get_stats(user))
