from django.contrib import admin
from .models import Video, VideoComment, VideoLike


@admin.register(Video)
class VideoAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'author', 'category', 'created_at')
    list_filter = ('category', 'created_at')
    search_fields = ('title', 'description', 'author__handle')
    raw_id_fields = ('author',)
    readonly_fields = ('id', 'created_at')


@admin.register(VideoLike)
class VideoLikeAdmin(admin.ModelAdmin):
    list_display = ('video', 'user', 'created_at')
    raw_id_fields = ('video', 'user')


@admin.register(VideoComment)
class VideoCommentAdmin(admin.ModelAdmin):
    list_display = ('video', 'author', 'body', 'created_at')
    search_fields = ('body', 'author__handle')
    raw_id_fields = ('video', 'author')
