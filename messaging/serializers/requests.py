# messaging/serializers/requests.py
from rest_framework import serializers

from users.serializers import UserSerializer
from ..models import MessageRequest


class MessageRequestSerializer(serializers.ModelSerializer):
    senderId = serializers.UUIDField(source="sender_id", read_only=True)
    recipientId = serializers.UUIDField(source="recipient_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    sender = UserSerializer(read_only=True)

    class Meta:
        model = MessageRequest
        fields = [
            "id",
            "senderId",
            "recipientId",
            "body",
            "createdAt",
            "status",
            "sender",
        ]
        read_only_fields = fields

    def __init__(self, *args, include_sender=False, **kwargs):
        super().__init__(*args, **kwargs)
        if not include_sender:
            self.fields.pop("sender")
