import logging

import jwt
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from api.constants import SUPABASE_JWT_SECRET, SUPBASE_ISSUER

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
AUDIENCE  = "authenticated"        # Supabase default


class SupabaseUser:
    def __init__(self, sub, email=None):
        self.id = sub
        self.email = email
        self.is_authenticated = True

    def __str__(self):
        return self.email or self.id


def decode_supabase_token(token):
    return jwt.decode(
        token,
        SUPABASE_JWT_SECRET,  # HS256 shared secret
        algorithms=[ALGORITHM],
        audience=AUDIENCE,
        issuer=SUPBASE_ISSUER,
    )


class SupabaseJWTAuthentication(BaseAuthentication):
    """
    Validate Supabase access tokens.

    Expected header:  Authorization: Bearer <token>
    """
    def authenticate(self, request):
        auth = request.headers.get("Authorization", "")
        if not auth.startswith("Bearer "):
            return None        # let other authenticators run

        token = auth.split(" ", 1)[1]
        try:
            payload = decode_supabase_token(token)
        except jwt.PyJWTError as exc:
            raise AuthenticationFailed(f"Invalid Supabase token: {exc}")

        sub = payload.get("sub")
        if not sub:
            raise AuthenticationFailed("Invalid Supabase token: missing subject")

        user = SupabaseUser(sub, payload.get("email"))
        return (user, None)

    def authenticate_header(self, request):
        return 'Bearer realm="api"'


class OptionalSupabaseJWTAuthentication(SupabaseJWTAuthentication):
    """
    Same token check, but a missing or unusable token means "guest".

    Browser clients send the project's anon key as a bearer token when nobody
    is signed in; that token has no `authenticated` audience and must not be
    turned into a 401 on the AI endpoints.
    """
    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except AuthenticationFailed as exc:
            logger.debug(f"Treating caller as guest: {exc.detail}")
            return None
