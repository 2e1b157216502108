import django.db.models.deletion
import feeds.models
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Video",
            fields=[
                ("id", models.CharField(default=feeds.models.generate_video_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=140)),
                ("description", models.TextField(blank=True, null=True)),
                ("video_url", models.URLField(max_length=1000)),
                ("thumbnail_url", models.URLField(default="https://placehold.co/640x360?text=Vessel", max_length=1000)),
                ("category", models.CharField(default="testimony", max_length=64)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("duration_seconds", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="videos", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["author", "-created_at"], name="video_author_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="VideoComment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("body", models.CharField(max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="video_comments", to=settings.AUTH_USER_MODEL)),
                ("video", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="feeds.video")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["video", "-created_at"], name="comment_video_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="VideoLike",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="video_likes", to=settings.AUTH_USER_MODEL)),
                ("video", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="likes", to="feeds.video")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="videolike",
            constraint=models.UniqueConstraint(fields=("video", "user"), name="unique_video_like"),
        ),
    ]
