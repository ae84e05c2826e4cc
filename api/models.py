# scriptgenie-backend/api/models.py

from django.db import models
import uuid

from .constants import DEFAULT_SERIES_COLOR, Language, ScriptType


class VideoSeries(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(db_index=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    cover_image = models.TextField(blank=True, null=True)
    color_theme = models.CharField(max_length=20, default=DEFAULT_SERIES_COLOR)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'video_series'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class Script(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(db_index=True)
    topic = models.TextField()
    language = models.CharField(max_length=20, choices=Language.choices, default=Language.ENGLISH)
    script_type = models.CharField(max_length=20, choices=ScriptType.choices)
    content = models.TextField()
    # Deleting a series keeps its scripts, just unlinked
    series = models.ForeignKey(VideoSeries, db_column='series_id', null=True, blank=True,
                               on_delete=models.SET_NULL, related_name='scripts')
    episode_number = models.IntegerField(null=True, blank=True)
    share_token = models.CharField(max_length=64, unique=True, null=True, blank=True)
    is_public = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'scripts'
        ordering = ['-created_at']

    def __str__(self):
        return self.topic[:50]


class ScriptAnalytics(models.Model):
    """Performance numbers for a published script. Written by an external sync, only read here."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    script = models.ForeignKey(Script, db_column='script_id', on_delete=models.CASCADE, related_name='analytics')
    views = models.IntegerField(default=0)
    likes = models.IntegerField(default=0)
    comments = models.IntegerField(default=0)
    platform = models.CharField(max_length=50, blank=True, null=True)
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'script_analytics'
        ordering = ['-created_at']


class GuestUsage(models.Model):
    """Fixed-window request counter for anonymous callers (`<prefix>_<ip>`)."""
    id = models.AutoField(primary_key=True)
    identifier = models.CharField(max_length=255, unique=True)
    request_count = models.IntegerField(default=0)
    window_started_at = models.DateTimeField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'guest_usage'
