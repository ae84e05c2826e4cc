import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from rest_framework.test import APIClient


def completion(content):
    """Shape of an openai ChatCompletion, as far as the relay reads it."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture(autouse=True)
def database_limiter(settings):
    """Count guest usage in the test database instead of calling Supabase."""
    from api.ratelimit import _load_limiter

    settings.GUEST_RATE_LIMITER = "api.ratelimit.DatabaseGuestRateLimiter"
    settings.GUEST_LIMIT_FAIL_OPEN = True
    _load_limiter.cache_clear()
    yield
    _load_limiter.cache_clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def auth_client(user_id):
    from api.utils import generate_test_jwt_token

    client = APIClient()
    token = generate_test_jwt_token(user_id, email="creator@example.com")
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


@pytest.fixture
def other_client():
    from api.utils import generate_test_jwt_token

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_test_jwt_token(uuid.uuid4())}")
    return client


@pytest.fixture
def token_without_subject():
    """Correctly signed Supabase-style token that names no user."""
    import jwt
    from api.constants import SUPABASE_JWT_SECRET, SUPBASE_ISSUER

    payload = {"aud": "authenticated", "iss": SUPBASE_ISSUER, "role": "authenticated"}
    return jwt.encode(payload, SUPABASE_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def gateway(monkeypatch):
    """Stand-in for the OpenAI-compatible gateway client."""
    client = MagicMock()
    client.chat.completions.create.return_value = completion("A generated reply")
    monkeypatch.setattr("api.utils.get_gateway_client", lambda: client)
    return client


@pytest.fixture
def gateway_reply(gateway):
    def _reply(content):
        gateway.chat.completions.create.return_value = completion(content)
        return gateway
    return _reply


@pytest.fixture
def tts(monkeypatch):
    client = MagicMock()
    client.audio.speech.create.return_value = SimpleNamespace(content=b"ID3-fake-mp3-bytes")
    monkeypatch.setattr("api.utils.get_tts_client", lambda: client)
    return client
