# follows/urls.py
from django.urls import path
from .views import FollowListView, FollowStatsView, FollowView

urlpatterns = [
    path("following", FollowListView.as_view(relation="following"), name="follow-following"),
    path("followers", FollowListView.as_view(relation="followers"), name="follow-followers"),
    path("mutual", FollowListView.as_view(relation="mutual"), name="follow-mutual"),
    path(
        "profiles/<str:identifier>/stats",
        FollowStatsView.as_view(),
        name="follow-stats",
    ),
    path("<str:handle>", FollowView.as_view(), name="follow-user"),
]
