# messaging/views/threads.py
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
import logging

from core.pagination import parse_cursor, parse_limit
from ..serializers import (
    AppendMessageSerializer,
    MessageRequestSerializer,
    MessageSerializer,
    SendMessageSerializer,
    ThreadSummarySerializer,
)
from ..services import threads as thread_services
from ..throttling import MessageRateThrottle

logger = logging.getLogger(__name__)

SEND_STATUS = {
    thread_services.APPENDED: status.HTTP_200_OK,
    thread_services.CREATED: status.HTTP_201_CREATED,
}


@extend_schema_view(
    list=extend_schema(
        description="Threads the caller participates in, most recently active first, "
        "with the last message and the caller's unread count.",
        summary="List Threads",
        tags=["Messages"],
        responses={200: ThreadSummarySerializer(many=True)},
    ),
    create=extend_schema(
        description="Send a message to a set of handles. Appends to the thread with "
        "exactly these participants (200), creates message requests for recipients "
        "who are not mutual follows (202) or opens a new thread (201).",
        summary="Send Message",
        tags=["Messages"],
        request=SendMessageSerializer,
    ),
    retrieve=extend_schema(summary="Retrieve Thread", tags=["Messages"]),
    destroy=extend_schema(
        description="Leave the thread. The thread is removed once nobody is left in it.",
        summary="Leave Thread",
        tags=["Messages"],
        responses={204: None},
    ),
)
class ThreadViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    def get_throttles(self):
        throttles = super().get_throttles()
        if self.action in ("create", "send_message"):
            throttles.append(MessageRateThrottle())
        return throttles

    def list(self, request):
        threads = thread_services.thread_summaries_for(request.user)
        return Response({"threads": ThreadSummarySerializer(threads, many=True).data})

    def create(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = thread_services.send_message(
            request.user,
            serializer.validated_data["handles"],
            serializer.validated_data["message"],
            subject=serializer.validated_data.get("subject"),
        )

        if outcome.kind == thread_services.REQUESTED:
            return Response(
                {"requests": MessageRequestSerializer(outcome.requests, many=True).data},
                status=status.HTTP_202_ACCEPTED,
            )
        return Response(
            {"thread": ThreadSummarySerializer(outcome.thread).data},
            status=SEND_STATUS[outcome.kind],
        )

    def retrieve(self, request, pk=None):
        thread = thread_services.get_thread_summary(pk, request.user)
        return Response({"thread": ThreadSummarySerializer(thread).data})

    def destroy(self, request, pk=None):
        thread_services.leave_thread(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        description="Messages in ascending order. Listing marks the thread as read for the caller.",
        summary="List Messages",
        tags=["Messages"],
        parameters=[
            OpenApiParameter("limit", int, description="1-200, default 50"),
            OpenApiParameter("before", str, description="ISO timestamp; messages created before it"),
        ],
        responses={200: MessageSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def messages(self, request, pk=None):
        messages = thread_services.list_messages(
            pk,
            request.user,
            limit=parse_limit(
                request.query_params.get("limit"),
                default=thread_services.DEFAULT_MESSAGE_LIMIT,
                maximum=thread_services.MAX_MESSAGE_LIMIT,
            ),
            before=parse_cursor(request.query_params.get("before")),
        )
        return Response({"messages": MessageSerializer(messages, many=True).data})

    @extend_schema(
        summary="Send Message To Thread",
        tags=["Messages"],
        request=AppendMessageSerializer,
        responses={201: MessageSerializer},
    )
    @messages.mapping.post
    def send_message(self, request, pk=None):
        serializer = AppendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = thread_services.append_message(
            pk, request.user, serializer.validated_data["body"]
        )
        return Response(
            {"message": MessageSerializer(message).data}, status=status.HTTP_201_CREATED
        )
