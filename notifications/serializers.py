# notifications/serializers.py
from rest_framework import serializers

from users.serializers import UserSerializer
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    videoId = serializers.CharField(source="video_id", read_only=True, allow_null=True)
    videoTitle = serializers.CharField(source="video_title", read_only=True, allow_null=True)
    commentPreview = serializers.CharField(
        source="comment_preview", read_only=True, allow_null=True
    )
    actor = UserSerializer(read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "createdAt",
            "videoId",
            "videoTitle",
            "commentPreview",
            "actor",
        ]
        read_only_fields = fields
