from rest_framework import serializers

from users.serializers import UserSerializer
from .models import Video, VideoComment


class VideoSerializer(serializers.ModelSerializer):
    videoUrl = serializers.CharField(source="video_url", read_only=True)
    thumbnailUrl = serializers.CharField(source="thumbnail_url", read_only=True)
    durationSeconds = serializers.IntegerField(source="duration_seconds", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    stats = serializers.SerializerMethodField()
    user = UserSerializer(source="author", read_only=True)

    class Meta:
        model = Video
        fields = [
            "id",
            "title",
            "description",
            "videoUrl",
            "thumbnailUrl",
            "category",
            "tags",
            "durationSeconds",
            "createdAt",
            "stats",
            "user",
        ]
        read_only_fields = fields

    def get_stats(self, obj):
        return {
            "likes": getattr(obj, "like_count", 0) or 0,
            "comments": getattr(obj, "comment_count", 0) or 0,
        }


class VideoCreateSerializer(serializers.Serializer):
    title = serializers.CharField(min_length=3, max_length=140)
    description = serializers.CharField(
        max_length=2000, required=False, allow_blank=True, allow_null=True
    )
    category = serializers.CharField(
        max_length=64, required=False, allow_blank=True, allow_null=True
    )
    tags = serializers.JSONField(required=False)
    thumbnailUrl = serializers.URLField(required=False, allow_null=True)
    videoUrl = serializers.URLField()
    durationSeconds = serializers.IntegerField(min_value=0, required=False)

    def validate_tags(self, value):
        if value is None:
            return []
        if not isinstance(value, (list, str)):
            raise serializers.ValidationError(
                "Tags must be a list or a comma separated string."
            )
        return value

    def to_service_kwargs(self):
        data = self.validated_data
        return {
            "title": data["title"],
            "video_url": data["videoUrl"],
            "description": data.get("description"),
            "category": data.get("category"),
            "tags": data.get("tags"),
            "thumbnail_url": data.get("thumbnailUrl"),
            "duration_seconds": data.get("durationSeconds", 0),
        }


class CommentSerializer(serializers.ModelSerializer):
    videoId = serializers.CharField(source="video_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    user = UserSerializer(source="author", read_only=True)

    class Meta:
        model = VideoComment
        fields = ["id", "videoId", "body", "createdAt", "user"]
        read_only_fields = fields


class CommentCreateSerializer(serializers.Serializer):
    body = serializers.CharField(min_length=1, max_length=500)
