import re
import jwt
import secrets
import base64
import openai
import json_repair
from datetime import datetime, timedelta, timezone
from .constants import (
    AI_GATEWAY_URL, AI_GATEWAY_API_KEY, AI_GATEWAY_MODEL, AI_GATEWAY_TIMEOUT,
    OPENAI_API_KEY, TTS_MODEL, SUPABASE_JWT_SECRET, SUPBASE_ISSUER, VOICE_MAP,
)
from .exceptions import (
    GatewayError, GatewayNotConfigured, GatewayPaymentRequired,
    GatewayRateLimited, MalformedAIResponse,
)
import logging

logger = logging.getLogger(__name__)

_gateway_client = None

SHARE_TOKEN_BYTES = 24


def generate_test_jwt_token(user_id, email=None):
    """
    Generate a test JWT token for local development.
    This mimics the structure of Supabase JWT tokens.
    """
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),  # Supabase uses 'sub' for user ID
        'email': email,
        'aud': 'authenticated',
        'iss': SUPBASE_ISSUER,
        'role': 'authenticated',
        'iat': now,
        'exp': now + timedelta(hours=1),  # Token expires in 1 hour
    }
    token = jwt.encode(
        payload,
        SUPABASE_JWT_SECRET,
        algorithm='HS256'
    )
    return token


def get_gateway_client():
    global _gateway_client
    if not AI_GATEWAY_API_KEY:
        raise GatewayNotConfigured()
    if _gateway_client is None:
        _gateway_client = openai.OpenAI(
            base_url=AI_GATEWAY_URL,
            api_key=AI_GATEWAY_API_KEY,
            timeout=AI_GATEWAY_TIMEOUT,
            max_retries=0,  # one best-effort call per user action
        )
    return _gateway_client


def _translate_openai_error(e, service="AI gateway"):
    """Map an openai SDK exception onto the API's error taxonomy."""
    if isinstance(e, openai.RateLimitError):
        logger.warning(f"{service} rate limited: {e}")
        return GatewayRateLimited()
    if isinstance(e, openai.APIStatusError):
        if e.status_code == 402:
            logger.warning(f"{service} payment required: {e}")
            return GatewayPaymentRequired()
        logger.error(f"{service} error: {e.status_code} {e.response.text if e.response is not None else ''}")
        return GatewayError(f"{service} error: {e.status_code}")
    logger.error(f"{service} unreachable: {e}")
    return GatewayError(f"{service} error: {e.__class__.__name__}")


def call_gateway(messages, client=None):
    """Send one chat completion and return the reply text."""
    client = client or get_gateway_client()
    try:
        response = client.chat.completions.create(
            model=AI_GATEWAY_MODEL,
            messages=messages,
        )
    except (openai.APIStatusError, openai.APIConnectionError) as e:
        raise _translate_openai_error(e)
    return extract_reply(response)


def extract_reply(response):
    choices = getattr(response, "choices", None) or []
    if not choices:
        raise MalformedAIResponse("AI gateway returned no choices")
    content = choices[0].message.content
    if not content or not content.strip():
        raise MalformedAIResponse("AI gateway returned an empty response")
    return content


def parse_openai_response(response_content, expect=dict):
    """
    Extract and parse the JSON object (or array) embedded in the model output.
    Handles common noise like markdown fences or trailing commentary.
    """
    open_char, close_char = ("[", "]") if expect is list else ("{", "}")
    try:
        candidate = re.sub(r"```(?:json)?|```", "", response_content).strip()

        start = candidate.find(open_char)
        end   = candidate.rfind(close_char)
        if start == -1 or end == -1 or end < start:
            raise ValueError("No JSON braces found in model output")

        json_str = candidate[start:end + 1]

        def _escaper(match):
            return match.group(0).replace("\n", "\\n")
        json_str = re.sub(r'"(?:[^"\\]|\\.)*"', _escaper, json_str, flags=re.DOTALL)

        parsed = json_repair.loads(json_str)
    except Exception as e:
        logger.error(f"JSON parsing error: {e}\n model_response: {response_content}")
        raise MalformedAIResponse(f"AI response could not be parsed: {e}")

    if not isinstance(parsed, expect):
        logger.error(f"Expected JSON {expect.__name__}, got: {response_content}")
        raise MalformedAIResponse(f"AI response is not a JSON {'array' if expect is list else 'object'}")
    return parsed


def validate_ai_result(serializer_class, data, many=False):
    """Check parsed model output against the schema the endpoint promises."""
    serializer = serializer_class(data=data, many=many)
    if not serializer.is_valid():
        logger.error(f"AI response failed {serializer_class.__name__}: {serializer.errors}")
        raise MalformedAIResponse("AI response did not match the expected format")
    return serializer.validated_data


def generate_structured(messages, serializer_class, expect=dict, many=False, client=None):
    """Gateway call whose reply must be JSON matching `serializer_class`."""
    content = call_gateway(messages, client=client)
    parsed = parse_openai_response(content, expect=expect)
    return validate_ai_result(serializer_class, parsed, many=many)


def select_voice(voice, tone):
    return VOICE_MAP.get((voice, tone), "alloy")


def get_tts_client():
    if not OPENAI_API_KEY:
        raise GatewayError("OPENAI_API_KEY is not configured")
    return openai.OpenAI(api_key=OPENAI_API_KEY, max_retries=0)


def synthesize_speech(text, voice, tone, client=None):
    """Text to speech through OpenAI; returns base64-encoded mp3."""
    client = client or get_tts_client()

    selected_voice = select_voice(voice, tone)
    logger.info(f"Synthesizing {len(text)} characters with voice {selected_voice}")
    try:
        response = client.audio.speech.create(
            model=TTS_MODEL,
            input=text,
            voice=selected_voice,
            response_format="mp3",
        )
    except (openai.APIStatusError, openai.APIConnectionError) as e:
        raise _translate_openai_error(e, service="OpenAI API")
    return base64.b64encode(response.content).decode("ascii")


def generate_share_token():
    return secrets.token_urlsafe(SHARE_TOKEN_BYTES)
