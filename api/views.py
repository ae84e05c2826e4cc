import logging
from datetime import timedelta

from django.db.models import Count, F, Q, Sum
from django.db.models.functions import Coalesce
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import generics
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from scriptgenie.middleware import OptionalSupabaseJWTAuthentication
from .constants import (
    DEFAULT_ANALYTICS_DAYS,
    GUEST_LIMITS,
    MAX_ANALYTICS_DAYS,
    TOP_SCRIPTS_COUNT,
    ResearchAction,
)
from .models import Script, ScriptAnalytics, VideoSeries
from .prompts import (
    build_caption_messages,
    build_chat_messages,
    build_enhance_messages,
    build_research_messages,
    build_script_messages,
    build_summary_messages,
    build_topic_messages,
    build_visual_messages,
)
from .ratelimit import CallerIdentity, GuestRateThrottle
from .serializers import (
    AnalyzeTopicSerializer,
    CaptionHashtagSerializer,
    CaptionResultSerializer,
    ChatSerializer,
    EnhanceScriptSerializer,
    FactCheckResultSerializer,
    GenerateScriptSerializer,
    PublicScriptSerializer,
    ResearchSerializer,
    ScriptAnalyticsSerializer,
    ScriptSerializer,
    ScriptUpdateSerializer,
    SeriesAssignmentSerializer,
    SourceResultSerializer,
    SummaryResultSerializer,
    SummarySerializer,
    TopicAnalysisResultSerializer,
    VideoSeriesSerializer,
    VisualSuggestionResultSerializer,
    VisualSuggestionSerializer,
    VoiceoverSerializer,
)
from .utils import call_gateway, generate_share_token, generate_structured, synthesize_speech

logger = logging.getLogger(__name__)


class GatewayAPIView(APIView):
    """
    Base for the AI endpoints.

    Anyone may call them; a valid Supabase token only lifts the guest ceiling.
    Subclasses set `request_serializer` and, if guests are capped,
    `guest_scope` (one of GUEST_LIMITS).
    """
    authentication_classes = [OptionalSupabaseJWTAuthentication]
    permission_classes = [AllowAny]
    throttle_classes = [GuestRateThrottle]
    request_serializer = None
    guest_scope = None

    @property
    def guest_limit(self):
        return GUEST_LIMITS.get(self.guest_scope)

    def check_throttles(self, request):
        # Deferred to validated(): a rejected body must not spend guest quota
        pass

    def validated(self, request):
        serializer = self.request_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        super().check_throttles(request)
        return serializer.validated_data


class GenerateScriptView(GatewayAPIView):
    request_serializer = GenerateScriptSerializer
    guest_scope = "script"

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        logger.info(f"Generating script for: {data['topic']}")

        script = call_gateway(build_script_messages(data["topic"], data["language"], data["scriptType"]))
        payload = {"script": script}

        caller = CallerIdentity.from_request(request)
        if not caller.is_guest:
            saved = Script.objects.create(
                user_id=caller.user_id,
                topic=data["topic"],
                language=data["language"],
                script_type=data["scriptType"],
                content=script,
            )
            payload["scriptId"] = str(saved.id)
        return Response(payload)


class EnhanceScriptView(GatewayAPIView):
    request_serializer = EnhanceScriptSerializer
    guest_scope = "enhance"

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        logger.info(f"Enhancing script with action: {data['action']}")
        enhanced = call_gateway(build_enhance_messages(data["text"], data["action"]))
        return Response({"enhancedText": enhanced})


class CaptionHashtagView(GatewayAPIView):
    request_serializer = CaptionHashtagSerializer

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        logger.info(f"Generating captions for: {data['scriptTopic']}")
        result = generate_structured(
            build_caption_messages(data["scriptContent"], data["scriptTopic"]),
            CaptionResultSerializer,
        )
        return Response(result)


class SummaryView(GatewayAPIView):
    request_serializer = SummarySerializer

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        logger.info(f"Generating summary with emotion mode: {data['emotionMode']}")
        result = generate_structured(
            build_summary_messages(data["scriptContent"], data["emotionMode"]),
            SummaryResultSerializer,
        )
        return Response(result)


class AnalyzeTopicView(GatewayAPIView):
    request_serializer = AnalyzeTopicSerializer
    guest_scope = "topic"

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        logger.info(f"Analyzing niche: {data['niche']}")
        result = generate_structured(build_topic_messages(data["niche"]), TopicAnalysisResultSerializer)
        return Response(result)


class ResearchAssistantView(GatewayAPIView):
    request_serializer = ResearchSerializer

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        action = data["action"]
        logger.info(f"Research assistant action: {action}")

        messages = build_research_messages(
            action,
            text=data.get("text"),
            context=data.get("context"),
            topic=data.get("topic"),
            content=data.get("content"),
            script_type=data.get("scriptType"),
        )
        if action == ResearchAction.FACT_CHECK:
            result = generate_structured(messages, FactCheckResultSerializer)
        elif action == ResearchAction.GENERATE_SOURCES:
            result = generate_structured(messages, SourceResultSerializer, expect=list, many=True)
        else:
            result = call_gateway(messages)
        return Response({"result": result})


class VoiceoverView(GatewayAPIView):
    request_serializer = VoiceoverSerializer
    guest_scope = "voice"

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        logger.info(f"Generating voiceover: {data['voice']}/{data['tone']}")
        audio = synthesize_speech(data["text"], data["voice"], data["tone"])
        return Response({"audioContent": audio})


class ChatHelperView(GatewayAPIView):
    request_serializer = ChatSerializer
    guest_scope = "chat"

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        reply = call_gateway(build_chat_messages(data["message"], data.get("scriptContext")))
        return Response({"reply": reply})


class VisualSuggestionView(GatewayAPIView):
    request_serializer = VisualSuggestionSerializer

    def post(self, request, *args, **kwargs):
        data = self.validated(request)
        result = generate_structured(
            build_visual_messages(data["scriptContent"], data.get("scriptType")),
            VisualSuggestionResultSerializer,
        )
        return Response({"scenes": result["scenes"]})


# --- Saved scripts, series, analytics ---------------------------------------

class ScriptListCreateView(generics.ListCreateAPIView):
    serializer_class = ScriptSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        queryset = Script.objects.filter(user_id=self.request.user.id).select_related('series')

        q = self.request.query_params.get('q')
        if q:
            queryset = queryset.filter(Q(topic__icontains=q) | Q(content__icontains=q))

        script_type = self.request.query_params.get('type')
        if script_type and script_type != 'all':
            queryset = queryset.filter(script_type=script_type)

        language = self.request.query_params.get('language')
        if language and language != 'all':
            queryset = queryset.filter(language=language)

        series_id = self.request.query_params.get('series')
        if series_id:
            queryset = queryset.filter(series_id=series_id)

        return queryset.order_by('-created_at')

    def perform_create(self, serializer):
        serializer.save(user_id=self.request.user.id)


class ScriptDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = ScriptSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'id'
    http_method_names = ['get', 'patch', 'delete', 'options']

    def get_queryset(self):
        # Only allow access to the user's own scripts
        return Script.objects.filter(user_id=self.request.user.id).select_related('series')

    def update(self, request, *args, **kwargs):
        script = self.get_object()
        serializer = ScriptUpdateSerializer(script, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(ScriptSerializer(script).data)


class ScriptSeriesAssignView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id, *args, **kwargs):
        script = get_object_or_404(Script, id=id, user_id=request.user.id)
        serializer = SeriesAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        series_id = serializer.validated_data['seriesId']
        if series_id is None:
            script.series = None
            script.episode_number = None
        else:
            script.series = get_object_or_404(VideoSeries, id=series_id, user_id=request.user.id)
            script.episode_number = serializer.validated_data.get('episodeNumber')
        script.save(update_fields=['series', 'episode_number', 'updated_at'])
        return Response(ScriptSerializer(script).data)


class ScriptShareView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id, *args, **kwargs):
        script = get_object_or_404(Script, id=id, user_id=request.user.id)
        if not script.share_token:
            script.share_token = generate_share_token()
        script.is_public = True
        script.save(update_fields=['share_token', 'is_public', 'updated_at'])
        logger.info(f"Script {script.id} shared")
        return Response({'share_token': script.share_token, 'is_public': script.is_public})


class SharedScriptView(generics.RetrieveAPIView):
    serializer_class = PublicScriptSerializer
    authentication_classes = []
    permission_classes = [AllowAny]
    lookup_field = 'share_token'
    lookup_url_kwarg = 'token'
    queryset = Script.objects.filter(is_public=True)


def _series_queryset(user_id):
    return VideoSeries.objects.filter(user_id=user_id).annotate(script_count=Count('scripts'))


class SeriesListCreateView(generics.ListCreateAPIView):
    serializer_class = VideoSeriesSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return _series_queryset(self.request.user.id)

    def perform_create(self, serializer):
        series = serializer.save(user_id=self.request.user.id)
        series.script_count = 0


class SeriesDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = VideoSeriesSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'id'
    http_method_names = ['get', 'patch', 'delete', 'options']

    def get_queryset(self):
        return _series_queryset(self.request.user.id)


class SeriesScriptsView(generics.ListAPIView):
    serializer_class = ScriptSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        series = get_object_or_404(VideoSeries, id=self.kwargs['id'], user_id=self.request.user.id)
        return (
            series.scripts.filter(user_id=self.request.user.id)
            .select_related('series')
            .order_by(F('episode_number').asc(nulls_last=True), 'created_at')
        )


class AnalyticsView(APIView):
    permission_classes = [IsAuthenticated]

    def get_days(self, request):
        raw = request.query_params.get('days', DEFAULT_ANALYTICS_DAYS)
        try:
            days = int(raw)
        except (TypeError, ValueError):
            days = None
        if days is None or not 1 <= days <= MAX_ANALYTICS_DAYS:
            raise ValidationError(f"days must be an integer between 1 and {MAX_ANALYTICS_DAYS}")
        return days

    def get(self, request, *args, **kwargs):
        days = self.get_days(request)
        since = timezone.now() - timedelta(days=days)
        records = ScriptAnalytics.objects.filter(
            script__user_id=request.user.id,
            created_at__gte=since,
        )

        totals = records.aggregate(
            views=Coalesce(Sum('views'), 0),
            likes=Coalesce(Sum('likes'), 0),
            comments=Coalesce(Sum('comments'), 0),
        )

        by_platform = {}
        for row in records.values('platform').annotate(views=Sum('views')).order_by():
            platform = row['platform'] or 'Unknown'
            by_platform[platform] = by_platform.get(platform, 0) + (row['views'] or 0)

        top = (
            records.select_related('script')
            .annotate(engagement=F('views') + F('likes'))
            .order_by('-engagement', '-created_at')[:TOP_SCRIPTS_COUNT]
        )

        return Response({
            'days': days,
            'total_views': totals['views'],
            'total_likes': totals['likes'],
            'total_comments': totals['comments'],
            'views_by_platform': by_platform,
            'top_scripts': ScriptAnalyticsSerializer(top, many=True).data,
        })
