from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ["handle", "email", "name", "is_verified", "created_at"]
    list_filter = ["is_verified", "is_staff", "created_at"]
    search_fields = ["handle", "email", "name"]
    readonly_fields = ["email_hash", "created_at", "updated_at", "last_login"]
    exclude = ["password", "verification_code", "reset_token"]
