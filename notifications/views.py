# notifications/views.py
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .serializers import NotificationSerializer
from .services import list_notifications


class NotificationListView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        description="Most recent follow, like and comment events for the current user",
        summary="List Notifications",
        tags=["Notifications"],
        responses={200: NotificationSerializer(many=True)},
    )
    def get(self, request):
        notifications = list_notifications(request.user)
        return Response(
            {"notifications": NotificationSerializer(notifications, many=True).data}
        )
