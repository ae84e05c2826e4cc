import unicodedata

from rest_framework import serializers

from .constants import (
    MAX_CONTEXT_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_NICHE_LENGTH,
    MAX_RESEARCH_CONTENT_LENGTH,
    MAX_RESEARCH_CONTEXT_LENGTH,
    MAX_RESEARCH_TEXT_LENGTH,
    MAX_SCRIPT_CONTENT_LENGTH,
    MAX_TEXT_LENGTH,
    MAX_TOPIC_LENGTH,
    MAX_VOICEOVER_LENGTH,
    MIN_TOPIC_LENGTH,
    EmotionMode,
    EnhanceAction,
    Language,
    ResearchAction,
    ScriptType,
    VoiceGender,
    VoiceTone,
)
from .models import Script, ScriptAnalytics, VideoSeries
from .prompts import context_as_text

# Characters a topic may never contain, on top of control/format characters
TOPIC_FORBIDDEN_CHARS = set("<>{}`\\")
TOPIC_ALLOWED_CATEGORIES = ("L", "M", "N", "P", "Z", "S")


def topic_characters_allowed(value):
    for ch in value:
        if ch in "\n\t":
            continue
        if ch in TOPIC_FORBIDDEN_CHARS:
            return False
        if not unicodedata.category(ch).startswith(TOPIC_ALLOWED_CATEGORIES):
            return False
    return True


def check_topic(value):
    """Shared by every serializer that accepts a topic."""
    if len(value) < MIN_TOPIC_LENGTH:
        raise serializers.ValidationError(f"Topic must be at least {MIN_TOPIC_LENGTH} characters")
    if not topic_characters_allowed(value):
        raise serializers.ValidationError("Topic contains invalid characters")
    return value


class StrictCharField(serializers.CharField):
    """CharField that refuses numbers and booleans instead of coercing them."""

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


def text_field(label, max_length=None, min_length=None, required=True, trim=True):
    messages = {
        "required": f"{label} is required",
        "blank": f"{label} is required",
        "null": f"{label} is required",
        "invalid": f"{label} must be a string",
    }
    if max_length is not None:
        messages["max_length"] = f"{label} must be at most {max_length} characters"
    if min_length is not None:
        messages["min_length"] = f"{label} must be at least {min_length} characters"
    return StrictCharField(
        max_length=max_length,
        min_length=min_length,
        required=required,
        allow_blank=not required,
        allow_null=not required,
        trim_whitespace=trim,
        error_messages=messages,
    )


def choice_field(label, choices, required=True):
    values = [value for value, _ in choices]
    return serializers.ChoiceField(
        choices=choices,
        required=required,
        error_messages={
            "required": f"{label} is required",
            "null": f"{label} is required",
            "invalid_choice": f"Invalid {label.lower()}. Must be one of: {', '.join(values)}",
        },
    )


# --- Request validators ------------------------------------------------------

class GenerateScriptSerializer(serializers.Serializer):
    topic = text_field("Topic", max_length=MAX_TOPIC_LENGTH, min_length=MIN_TOPIC_LENGTH)
    language = choice_field("Language", Language.choices)
    scriptType = choice_field("Script type", ScriptType.choices)

    def validate_topic(self, value):
        return check_topic(value)


class EnhanceScriptSerializer(serializers.Serializer):
    text = text_field("Text", max_length=MAX_TEXT_LENGTH, trim=False)
    action = choice_field("Action", EnhanceAction.choices)


class CaptionHashtagSerializer(serializers.Serializer):
    scriptContent = text_field("Script content", max_length=MAX_SCRIPT_CONTENT_LENGTH)
    scriptTopic = text_field("Script topic", max_length=MAX_TOPIC_LENGTH)


class SummarySerializer(serializers.Serializer):
    scriptContent = text_field("Script content", max_length=MAX_SCRIPT_CONTENT_LENGTH)
    emotionMode = choice_field("Emotion mode", EmotionMode.choices)


class AnalyzeTopicSerializer(serializers.Serializer):
    niche = text_field("Niche", max_length=MAX_NICHE_LENGTH)


class ResearchSerializer(serializers.Serializer):
    action = choice_field("Action", ResearchAction.choices)
    text = text_field("Text", max_length=MAX_RESEARCH_TEXT_LENGTH, required=False)
    context = serializers.JSONField(required=False, allow_null=True)
    topic = text_field("Topic", max_length=MAX_TOPIC_LENGTH, required=False)
    content = text_field("Content", max_length=MAX_RESEARCH_CONTENT_LENGTH, required=False)
    scriptType = text_field("Script type", max_length=50, required=False)

    TEXT_ACTIONS = (
        ResearchAction.FACT_CHECK,
        ResearchAction.EXPAND_FACT,
        ResearchAction.SMOOTH_INTEGRATE,
        ResearchAction.SUGGEST_RELATED,
    )

    def validate_context(self, value):
        if value is None:
            return value
        if not isinstance(value, (str, dict)):
            raise serializers.ValidationError("Context must be a string or an object")
        if len(context_as_text(value)) > MAX_RESEARCH_CONTEXT_LENGTH:
            raise serializers.ValidationError(
                f"Context must be at most {MAX_RESEARCH_CONTEXT_LENGTH} characters"
            )
        return value

    def validate(self, attrs):
        action = attrs["action"]
        if action in self.TEXT_ACTIONS and not attrs.get("text"):
            raise serializers.ValidationError(f"Text is required for {action}")
        if action == ResearchAction.GENERATE_SOURCES:
            if not attrs.get("topic"):
                raise serializers.ValidationError("Topic is required for generate_sources")
            if not attrs.get("content"):
                raise serializers.ValidationError("Content is required for generate_sources")
        return attrs


class VoiceoverSerializer(serializers.Serializer):
    text = text_field("Text", max_length=MAX_VOICEOVER_LENGTH, trim=False)
    voice = choice_field("Voice", VoiceGender.choices)
    tone = choice_field("Tone", VoiceTone.choices)


class ChatSerializer(serializers.Serializer):
    message = text_field("Message", max_length=MAX_MESSAGE_LENGTH)
    scriptContext = text_field("Script context", max_length=MAX_CONTEXT_LENGTH, required=False, trim=False)


class VisualSuggestionSerializer(serializers.Serializer):
    scriptContent = text_field("Script content", max_length=MAX_SCRIPT_CONTENT_LENGTH)
    scriptType = text_field("Script type", max_length=50, required=False)


# --- AI result schemas -------------------------------------------------------

class SummaryResultSerializer(serializers.Serializer):
    title = serializers.CharField()
    description = serializers.CharField()
    hashtags = serializers.ListField(child=serializers.CharField())


class CaptionResultSerializer(serializers.Serializer):
    caption = serializers.CharField()
    hashtags = serializers.ListField(child=serializers.CharField(), allow_empty=False)

    def validate_hashtags(self, value):
        return [tag if tag.startswith("#") else f"#{tag}" for tag in value]


class TopicAnalysisResultSerializer(serializers.Serializer):
    trendingTopics = serializers.ListField(child=serializers.CharField())
    viralHooks = serializers.ListField(child=serializers.CharField())
    suggestedTitles = serializers.ListField(child=serializers.CharField())


class FactCheckResultSerializer(serializers.Serializer):
    verified = serializers.BooleanField()
    summary = serializers.CharField()
    sources = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    confidence = serializers.ChoiceField(choices=["high", "medium", "low"])


class SourceResultSerializer(serializers.Serializer):
    title = serializers.CharField()
    description = serializers.CharField(required=False, allow_blank=True, default="")
    url = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class VisualSceneResultSerializer(serializers.Serializer):
    title = serializers.CharField()
    background = serializers.CharField()
    camera = serializers.CharField()
    lighting = serializers.CharField()
    tone = serializers.CharField()


class VisualSuggestionResultSerializer(serializers.Serializer):
    scenes = VisualSceneResultSerializer(many=True)


# --- Persistence -------------------------------------------------------------

class ScriptSerializer(serializers.ModelSerializer):
    series_name = serializers.CharField(source="series.name", read_only=True, default=None)
    content = serializers.CharField(trim_whitespace=False, max_length=100000)

    class Meta:
        model = Script
        fields = [
            "id", "topic", "language", "script_type", "content", "series", "series_name",
            "episode_number", "share_token", "is_public", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "series", "share_token", "is_public", "created_at", "updated_at"]
        extra_kwargs = {"topic": {"max_length": MAX_TOPIC_LENGTH}}

    def validate_topic(self, value):
        return check_topic(value)


class ScriptUpdateSerializer(serializers.ModelSerializer):
    """Rename or edit a saved script."""
    content = serializers.CharField(trim_whitespace=False, required=False, max_length=100000)

    class Meta:
        model = Script
        fields = ["topic", "content"]
        extra_kwargs = {"topic": {"max_length": MAX_TOPIC_LENGTH, "required": False}}

    def validate_topic(self, value):
        return check_topic(value)


class PublicScriptSerializer(serializers.ModelSerializer):
    class Meta:
        model = Script
        fields = ["id", "topic", "language", "script_type", "content", "created_at"]


class SeriesAssignmentSerializer(serializers.Serializer):
    seriesId = serializers.UUIDField(allow_null=True)
    episodeNumber = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class VideoSeriesSerializer(serializers.ModelSerializer):
    script_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = VideoSeries
        fields = [
            "id", "name", "description", "cover_image", "color_theme",
            "created_at", "updated_at", "script_count",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class ScriptAnalyticsSerializer(serializers.ModelSerializer):
    topic = serializers.CharField(source="script.topic", read_only=True)

    class Meta:
        model = ScriptAnalytics
        fields = ["id", "script", "topic", "views", "likes", "comments", "platform", "published_at", "created_at"]
