from django.contrib import admin
from .models import Follow


@admin.register(Follow)
class FollowAdmin(admin.ModelAdmin):
    list_display = ["follower", "followee", "created_at"]
    search_fields = ["follower__handle", "followee__handle"]
    raw_id_fields = ["follower", "followee"]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("follower", "followee")
