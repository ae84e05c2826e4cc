from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="VideoSeries",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField(db_index=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("cover_image", models.TextField(blank=True, null=True)),
                ("color_theme", models.CharField(default="#8b5cf6", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "video_series",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Script",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField(db_index=True)),
                ("topic", models.TextField()),
                ("language", models.CharField(choices=[("english", "English"), ("bengali", "Bengali (বাংলা)"), ("hindi", "Hindi (हिंदी)")], default="english", max_length=20)),
                ("script_type", models.CharField(choices=[("explainer", "Explainer"), ("narrative", "Narrative"), ("outline", "Outline"), ("youtube", "YouTube"), ("reels", "Reels"), ("movie", "Movie"), ("podcast", "Podcast"), ("ad", "Ad"), ("blog", "Blog")], max_length=20)),
                ("content", models.TextField()),
                ("episode_number", models.IntegerField(blank=True, null=True)),
                ("share_token", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ("is_public", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("series", models.ForeignKey(blank=True, db_column="series_id", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="scripts", to="api.videoseries")),
            ],
            options={
                "db_table": "scripts",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ScriptAnalytics",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("views", models.IntegerField(default=0)),
                ("likes", models.IntegerField(default=0)),
                ("comments", models.IntegerField(default=0)),
                ("platform", models.CharField(blank=True, max_length=50, null=True)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("script", models.ForeignKey(db_column="script_id", on_delete=django.db.models.deletion.CASCADE, related_name="analytics", to="api.script")),
            ],
            options={
                "db_table": "script_analytics",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="GuestUsage",
            fields=[
                ("id", models.AutoField(primary_key=True, serialize=False)),
                ("identifier", models.CharField(max_length=255, unique=True)),
                ("request_count", models.IntegerField(default=0)),
                ("window_started_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "guest_usage",
            },
        ),
    ]
