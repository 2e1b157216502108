from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["type", "recipient", "actor", "video_title", "created_at"]
    list_filter = ["type", "created_at"]
    search_fields = ["recipient__handle", "actor__handle", "video_title"]
    raw_id_fields = ["recipient", "actor", "video"]
