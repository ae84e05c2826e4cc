from django.conf import settings
from django.db import models

AI_GATEWAY_URL = settings.AI_GATEWAY_URL
AI_GATEWAY_API_KEY = settings.AI_GATEWAY_API_KEY
AI_GATEWAY_MODEL = settings.AI_GATEWAY_MODEL
AI_GATEWAY_TIMEOUT = settings.AI_GATEWAY_TIMEOUT

OPENAI_API_KEY = settings.OPENAI_API_KEY
TTS_MODEL = settings.TTS_MODEL

SUPABASE_JWT_SECRET = settings.SUPABASE_JWT_SECRET
SUPABASE_URL = settings.SUPABASE_URL
SUPABASE_KEY = settings.SUPABASE_KEY
SUPBASE_ISSUER    = f"{SUPABASE_URL}/auth/v1"

# Input limits
MIN_TOPIC_LENGTH = 5
MAX_TOPIC_LENGTH = 500
MAX_TEXT_LENGTH = 10000
MAX_MESSAGE_LENGTH = 5000
MAX_CONTEXT_LENGTH = 10000
MAX_NICHE_LENGTH = 500
MAX_RESEARCH_TEXT_LENGTH = 5000
MAX_RESEARCH_CONTEXT_LENGTH = 5000
MAX_RESEARCH_CONTENT_LENGTH = 10000
MAX_SCRIPT_CONTENT_LENGTH = 10000
MAX_VOICEOVER_LENGTH = 4000

# Characters of script content/context forwarded to the model
PROMPT_EXCERPT_LENGTH = 1000

# Guest ceilings, keyed by identifier prefix
GUEST_LIMITS = {
    "script": 9,
    "enhance": 20,
    "topic": 20,
    "chat": 50,
    "voice": 5,
}

DEFAULT_SERIES_COLOR = "#8b5cf6"
TOP_SCRIPTS_COUNT = 5
DEFAULT_ANALYTICS_DAYS = 30
MAX_ANALYTICS_DAYS = 365


class Language(models.TextChoices):
    ENGLISH = "english", "English"
    BENGALI = "bengali", "Bengali (বাংলা)"
    HINDI = "hindi", "Hindi (हिंदी)"


class ScriptType(models.TextChoices):
    EXPLAINER = "explainer", "Explainer"
    NARRATIVE = "narrative", "Narrative"
    OUTLINE = "outline", "Outline"
    YOUTUBE = "youtube", "YouTube"
    REELS = "reels", "Reels"
    MOVIE = "movie", "Movie"
    PODCAST = "podcast", "Podcast"
    AD = "ad", "Ad"
    BLOG = "blog", "Blog"


class EnhanceAction(models.TextChoices):
    EXPAND = "expand"
    SHORTEN = "shorten"
    EMOTIONAL = "emotional"
    POLISH = "polish"
    REGENERATE = "regenerate"
    FUNNY = "funny"
    MOTIVATIONAL = "motivational"
    DRAMATIC = "dramatic"
    PHILOSOPHICAL = "philosophical"
    PROFESSIONAL = "professional"


class ResearchAction(models.TextChoices):
    FACT_CHECK = "fact-check"
    EXPAND_FACT = "expand-fact"
    SMOOTH_INTEGRATE = "smooth-integrate"
    SUGGEST_RELATED = "suggest-related"
    GENERATE_SOURCES = "generate_sources"


class EmotionMode(models.TextChoices):
    NEUTRAL = "neutral"
    FUNNY = "funny"
    EMOTIONAL = "emotional"
    SERIOUS = "serious"
    MYSTERIOUS = "mysterious"


class VoiceGender(models.TextChoices):
    MALE = "male"
    FEMALE = "female"


class VoiceTone(models.TextChoices):
    CALM = "calm"
    ENERGETIC = "energetic"
    DRAMATIC = "dramatic"


VOICE_MAP = {
    ("male", "calm"): "onyx",
    ("male", "energetic"): "echo",
    ("male", "dramatic"): "fable",
    ("female", "calm"): "nova",
    ("female", "energetic"): "shimmer",
    ("female", "dramatic"): "alloy",
}
