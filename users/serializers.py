# users/serializers.py
from rest_framework import serializers
from django.contrib.auth import get_user_model

import logging

logger = logging.getLogger(__name__)
User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public profile shape used by every endpoint that returns a user."""

    photoUrl = serializers.CharField(source="photo_url", read_only=True, allow_null=True)
    isVerified = serializers.BooleanField(source="is_verified", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "handle",
            "name",
            "email",
            "church",
            "country",
            "photoUrl",
            "isVerified",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ContactMatchSerializer(serializers.Serializer):
    emails = serializers.ListField(
        child=serializers.EmailField(), required=False, max_length=128, default=list
    )
    hashes = serializers.ListField(
        child=serializers.CharField(max_length=128), required=False, max_length=256, default=list
    )

    def validate(self, data):
        if not data.get("emails") and not data.get("hashes"):
            raise serializers.ValidationError("Provide emails or hashes to match.")
        return data
