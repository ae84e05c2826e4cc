from django.urls import path
from .views import (
    GenerateScriptView,
    EnhanceScriptView,
    CaptionHashtagView,
    SummaryView,
    AnalyzeTopicView,
    ResearchAssistantView,
    VoiceoverView,
    ChatHelperView,
    VisualSuggestionView,
    ScriptListCreateView,
    ScriptDetailView,
    ScriptSeriesAssignView,
    ScriptShareView,
    SharedScriptView,
    SeriesListCreateView,
    SeriesDetailView,
    SeriesScriptsView,
    AnalyticsView,
)


urlpatterns = [
    path('generate-script/', GenerateScriptView.as_view(), name='generate-script'),
    path('enhance-script/', EnhanceScriptView.as_view(), name='enhance-script'),
    path('generate-captions-hashtags/', CaptionHashtagView.as_view(), name='generate-captions-hashtags'),
    path('generate-summary/', SummaryView.as_view(), name='generate-summary'),
    path('analyze-topic/', AnalyzeTopicView.as_view(), name='analyze-topic'),
    path('research-assistant/', ResearchAssistantView.as_view(), name='research-assistant'),
    path('generate-voiceover/', VoiceoverView.as_view(), name='generate-voiceover'),
    path('ai-chat-helper/', ChatHelperView.as_view(), name='ai-chat-helper'),
    path('generate-visual-suggestions/', VisualSuggestionView.as_view(), name='generate-visual-suggestions'),
    path('scripts/', ScriptListCreateView.as_view(), name='script-list'),
    path('scripts/<uuid:id>/', ScriptDetailView.as_view(), name='script-detail'),
    path('scripts/<uuid:id>/series/', ScriptSeriesAssignView.as_view(), name='script-series'),
    path('scripts/<uuid:id>/share/', ScriptShareView.as_view(), name='script-share'),
    path('shared/<str:token>/', SharedScriptView.as_view(), name='shared-script'),
    path('series/', SeriesListCreateView.as_view(), name='series-list'),
    path('series/<uuid:id>/', SeriesDetailView.as_view(), name='series-detail'),
    path('series/<uuid:id>/scripts/', SeriesScriptsView.as_view(), name='series-scripts'),
    path('analytics/', AnalyticsView.as_view(), name='analytics'),
]
