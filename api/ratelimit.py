"""
Guest usage limits.

Anonymous callers are identified by client IP and capped per endpoint;
signed-in callers are never limited here. The backend doing the counting is
picked by the GUEST_RATE_LIMITER setting, and what happens when it fails is
decided by GUEST_LIMIT_FAIL_OPEN.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.module_loading import import_string
from rest_framework.throttling import BaseThrottle
from supabase import create_client

from .exceptions import GuestLimitExceeded, RateLimiterUnavailable
from .models import GuestUsage

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"

GUEST_LIMIT_MESSAGES = {
    "script": "Sign in to continue generating scripts",
    "enhance": "Sign in to continue enhancing scripts",
    "topic": "Sign in to continue analyzing topics",
    "chat": "Sign in to continue using AI chat",
    "voice": "Sign in to continue generating voiceovers",
}


@dataclass(frozen=True)
class CallerIdentity:
    user_id: Optional[str] = None
    ip: str = UNKNOWN_CLIENT

    @property
    def is_guest(self):
        return self.user_id is None

    def identifier(self, scope):
        return f"{scope}_{self.ip}"

    @classmethod
    def from_request(cls, request):
        user = getattr(request, "user", None)
        if user is not None and getattr(user, "is_authenticated", False):
            return cls(user_id=str(user.id))
        return cls(ip=client_ip(request))


def client_ip(request):
    forwarded = request.headers.get("X-Forwarded-For", "")
    ip = forwarded.split(",")[0].strip()
    if ip:
        return ip
    return request.headers.get("X-Real-IP", "").strip() or UNKNOWN_CLIENT


@dataclass
class LimitDecision:
    allowed: bool
    remaining: Optional[int] = None


class LimiterBackendError(Exception):
    """The counting backend could not answer."""


class GuestRateLimiter:
    """Base class: subclasses count one request and say whether it is allowed."""

    def check(self, identifier, max_requests):
        raise NotImplementedError

    def evaluate(self, caller, scope, max_requests):
        if not caller.is_guest:
            return LimitDecision(allowed=True)

        identifier = caller.identifier(scope)
        try:
            return self.check(identifier, max_requests)
        except LimiterBackendError as e:
            logger.error(f"Rate limit check error for {identifier}: {e}")
            if settings.GUEST_LIMIT_FAIL_OPEN:
                return LimitDecision(allowed=True)
            raise RateLimiterUnavailable()


class SupabaseGuestRateLimiter(GuestRateLimiter):
    """Delegates counting and windowing to the `check_guest_limit` stored procedure."""

    rpc_name = "check_guest_limit"

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        return self._client

    def check(self, identifier, max_requests):
        try:
            response = self.client.rpc(
                self.rpc_name,
                {"_identifier": identifier, "_max_requests": max_requests},
            ).execute()
        except Exception as e:
            raise LimiterBackendError(str(e)) from e

        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict) or "allowed" not in data:
            raise LimiterBackendError(f"Unexpected {self.rpc_name} response: {response.data!r}")
        return LimitDecision(allowed=bool(data["allowed"]), remaining=data.get("remaining"))


class DatabaseGuestRateLimiter(GuestRateLimiter):
    """Fixed-window counter kept in the `guest_usage` table."""

    def __init__(self, window_seconds=None):
        self.window_seconds = window_seconds

    @property
    def window(self):
        return timedelta(seconds=self.window_seconds or settings.GUEST_LIMIT_WINDOW_SECONDS)

    def check(self, identifier, max_requests):
        now = timezone.now()
        try:
            with transaction.atomic():
                usage, _ = GuestUsage.objects.select_for_update().get_or_create(
                    identifier=identifier,
                    defaults={"window_started_at": now, "request_count": 0},
                )
                if now - usage.window_started_at >= self.window:
                    usage.window_started_at = now
                    usage.request_count = 0

                if usage.request_count >= max_requests:
                    usage.save(update_fields=["window_started_at", "request_count", "updated_at"])
                    return LimitDecision(allowed=False, remaining=0)

                usage.request_count += 1
                usage.save(update_fields=["window_started_at", "request_count", "updated_at"])
                return LimitDecision(allowed=True, remaining=max_requests - usage.request_count)
        except DatabaseError as e:
            raise LimiterBackendError(str(e)) from e


@lru_cache(maxsize=None)
def _load_limiter(path):
    return import_string(path)()


def get_guest_rate_limiter():
    return _load_limiter(settings.GUEST_RATE_LIMITER)


class GuestRateThrottle(BaseThrottle):
    """
    DRF throttle for the AI endpoints.

    The view declares `guest_scope` (identifier prefix) and `guest_limit`.
    A refused guest gets a 429 inviting them to sign in.
    """

    def allow_request(self, request, view):
        scope = getattr(view, "guest_scope", None)
        limit = getattr(view, "guest_limit", None)
        if not scope or limit is None:
            return True

        caller = CallerIdentity.from_request(request)
        decision = get_guest_rate_limiter().evaluate(caller, scope, limit)
        if not decision.allowed:
            logger.info(f"Guest limit reached for {caller.identifier(scope)}")
            raise GuestLimitExceeded(
                message=GUEST_LIMIT_MESSAGES.get(scope, "Sign in to continue using ScriptGenie"),
                remaining=0,
            )
        return True
