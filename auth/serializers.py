# auth/serializers.py
from rest_framework import serializers
from django.contrib.auth import get_user_model

UserModel = get_user_model()

HANDLE_PATTERN = r"^@?[A-Za-z0-9_]{3,32}$"


class SignupSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=120)
    handle = serializers.RegexField(
        HANDLE_PATTERN,
        error_messages={
            "invalid": "Handles are 3-32 characters of letters, numbers or underscores."
        },
    )
    email = serializers.EmailField()
    password = serializers.CharField(
        min_length=6,
        max_length=200,
        write_only=True,
        style={"input_type": "password"},
    )
    church = serializers.CharField(max_length=160, required=False, allow_blank=True)
    country = serializers.CharField(max_length=160, required=False, allow_blank=True)

    def validate_handle(self, value):
        return value.strip().lstrip("@").lower()

    def validate_email(self, value):
        return value.strip().lower()


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        min_length=1, max_length=200, write_only=True, style={"input_type": "password"}
    )


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class VerifyEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    code = serializers.RegexField(r"^\s*\d{6}\s*$")


class EmailOnlySerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField(min_length=10)
    password = serializers.CharField(
        min_length=6,
        max_length=200,
        write_only=True,
        style={"input_type": "password"},
    )
