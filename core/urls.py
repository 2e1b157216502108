# core/urls.py
from django.urls import path, include
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from .views import HealthCheckView

urlpatterns = [
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("health", HealthCheckView.as_view(), name="health"),
    path("auth/", include("auth.urls")),
    path("users/", include("users.urls")),
    path("contacts/", include("users.contact_urls")),
    path("follows/", include("follows.urls")),
    path("feed/", include("feeds.urls")),
    path("videos/", include("feeds.engagement_urls")),
    path("messages/", include("messaging.urls")),
    path("notifications/", include("notifications.urls")),
]
