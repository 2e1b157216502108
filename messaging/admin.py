from django.contrib import admin
from .models import Message, MessageRequest, Thread, ThreadParticipant


class ThreadParticipantInline(admin.TabularInline):
    model = ThreadParticipant
    extra = 0
    raw_id_fields = ("user",)
    readonly_fields = ("joined_at", "last_read_at")


@admin.register(Thread)
class ThreadAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "subject_display",
        "participants_count",
        "last_sequence",
        "created_at",
        "updated_at",
    )
    list_filter = ("created_at",)
    search_fields = ("subject", "participants__handle")
    readonly_fields = ("created_at", "updated_at", "last_sequence")
    inlines = [ThreadParticipantInline]
    list_per_page = 20

    def subject_display(self, obj):
        return obj.subject or f"Thread {obj.id}"

    subject_display.short_description = "Subject"

    def participants_count(self, obj):
        return obj.participants.count()

    participants_count.short_description = "Participants"


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "thread", "sender", "short_body", "sequence", "created_at")
    search_fields = ("body", "sender__handle")
    raw_id_fields = ("thread", "sender")
    readonly_fields = ("created_at", "sequence")

    def short_body(self, obj):
        return obj.body[:50] + "..." if len(obj.body) > 50 else obj.body

    short_body.short_description = "Body"


@admin.register(MessageRequest)
class MessageRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "sender", "recipient", "status", "created_at", "resolved_at")
    list_filter = ("status", "created_at")
    search_fields = ("sender__handle", "recipient__handle", "body")
    raw_id_fields = ("sender", "recipient")
