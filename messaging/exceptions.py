# messaging/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException


class NoRecipientsProvided(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Add at least one recipient handle."
    default_code = "no_recipients"


class NoValidRecipients(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "No matching recipients were found."
    default_code = "no_valid_recipients"


class ConversationNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Conversation not found."
    default_code = "conversation_not_found"


class MessageRequestNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Message request not found."
    default_code = "message_request_not_found"


class MessageRequestForbidden(APIException):
    """Raised when someone other than the recipient tries to resolve a request."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Only the recipient can respond to this message request."
    default_code = "message_request_forbidden"


class MessageRequestResolved(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This message request has already been resolved."
    default_code = "message_request_resolved"
