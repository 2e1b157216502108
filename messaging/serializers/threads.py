# messaging/serializers/threads.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from users.models import normalize_handle
from users.serializers import UserSerializer
from ..models import Message, Thread

User = get_user_model()


class MessageSerializer(serializers.ModelSerializer):
    threadId = serializers.UUIDField(source="thread_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    sender = UserSerializer(read_only=True)

    class Meta:
        model = Message
        fields = ["id", "threadId", "body", "createdAt", "sender"]
        read_only_fields = fields


class ThreadSummarySerializer(serializers.ModelSerializer):
    """
    Thread as shown in the inbox.

    Expects instances produced by the thread summary services, which carry
    ``unread_count`` and ``last_message`` alongside the prefetched
    participants.
    """

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    participants = UserSerializer(many=True, read_only=True)
    unreadCount = serializers.IntegerField(source="unread_count", read_only=True)
    lastMessage = serializers.SerializerMethodField()

    class Meta:
        model = Thread
        fields = [
            "id",
            "subject",
            "createdAt",
            "updatedAt",
            "participants",
            "unreadCount",
            "lastMessage",
        ]
        read_only_fields = fields

    def get_lastMessage(self, obj):
        message = getattr(obj, "last_message", None)
        if message is None:
            return None
        return MessageSerializer(message).data


class SendMessageSerializer(serializers.Serializer):
    handles = serializers.ListField(
        child=serializers.CharField(min_length=2, trim_whitespace=False),
        min_length=1,
        max_length=20,
    )
    message = serializers.CharField(min_length=1, max_length=2000)
    subject = serializers.CharField(
        max_length=140, required=False, allow_blank=True, allow_null=True
    )

    def validate_handles(self, value):
        limit = User._meta.get_field("handle").max_length
        too_long = [handle for handle in value if len(normalize_handle(handle)) > limit]
        if too_long:
            raise serializers.ValidationError(
                f"Handles can be at most {limit} characters long."
            )
        return value


class AppendMessageSerializer(serializers.Serializer):
    body = serializers.CharField(min_length=1, max_length=2000)
