# core/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException


class ModerationRejected(APIException):
    """Raised when submitted text matches a moderation term rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Content needs another pass before sharing."
    default_code = "moderation_rejected"
