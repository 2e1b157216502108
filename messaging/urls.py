# messaging/urls.py
from django.urls import path
from .views.threads import ThreadViewSet
from .views.requests import MessageRequestViewSet

urlpatterns = [
    # Threads
    path(
        "threads",
        ThreadViewSet.as_view({"get": "list", "post": "create"}),
        name="thread-list",
    ),
    path(
        "threads/<uuid:pk>",
        ThreadViewSet.as_view({"get": "retrieve", "delete": "destroy"}),
        name="thread-detail",
    ),
    path(
        "threads/<uuid:pk>/messages",
        ThreadViewSet.as_view({"get": "messages", "post": "send_message"}),
        name="thread-messages",
    ),
    # Message requests
    path(
        "requests",
        MessageRequestViewSet.as_view({"get": "list"}),
        name="message-request-list",
    ),
    path(
        "requests/<uuid:pk>/accept",
        MessageRequestViewSet.as_view({"post": "accept"}),
        name="message-request-accept",
    ),
    path(
        "requests/<uuid:pk>/decline",
        MessageRequestViewSet.as_view({"post": "decline"}),
        name="message-request-decline",
    ),
]
