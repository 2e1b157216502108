# messaging/views/requests.py
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view

from ..serializers import MessageRequestSerializer, ThreadSummarySerializer
from ..services import requests as request_services


@extend_schema_view(
    list=extend_schema(
        description="Pending message requests addressed to the caller, newest first.",
        summary="List Message Requests",
        tags=["Message Requests"],
    ),
)
class MessageRequestViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    def list(self, request):
        pending = request_services.list_incoming_requests(request.user)
        return Response(
            {
                "requests": MessageRequestSerializer(
                    pending, many=True, include_sender=True
                ).data
            }
        )

    @extend_schema(
        description="Accept a pending request. Opens (or reuses) the thread between "
        "the two users with the request body as a message from the sender.",
        summary="Accept Message Request",
        tags=["Message Requests"],
        request=None,
    )
    @action(detail=True, methods=["post"])
    def accept(self, request, pk=None):
        thread = request_services.accept_request(pk, request.user)
        return Response({"thread": ThreadSummarySerializer(thread).data})

    @extend_schema(
        summary="Decline Message Request",
        tags=["Message Requests"],
        request=None,
        responses={204: None},
    )
    @action(detail=True, methods=["post"])
    def decline(self, request, pk=None):
        request_services.decline_request(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
