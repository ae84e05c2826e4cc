import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class GatewayError(APIException):
    """Any upstream failure that is not a quota or billing answer."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "AI gateway error"
    default_code = "gateway_error"


class GatewayNotConfigured(GatewayError):
    default_detail = "AI_GATEWAY_API_KEY is not configured"
    default_code = "gateway_not_configured"


class GatewayRateLimited(APIException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = "Rate limits exceeded. Please try again later."
    default_code = "gateway_rate_limited"


class GatewayPaymentRequired(APIException):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_detail = "Payment required. Please add credits to continue."
    default_code = "gateway_payment_required"


class MalformedAIResponse(APIException):
    """The model answered, but not with the structure the endpoint promised."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "AI response could not be parsed"
    default_code = "malformed_ai_response"


class GuestLimitExceeded(APIException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_code = "guest_limit_exceeded"

    def __init__(self, message="Sign in to continue using ScriptGenie", remaining=0):
        self.payload = {
            "error": "Rate limit exceeded",
            "message": message,
            "remaining": remaining,
        }
        super().__init__(detail="Rate limit exceeded")


class RateLimiterUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Usage limits could not be checked. Please sign in or try again later."
    default_code = "rate_limiter_unavailable"


def _first_message(detail, field=None):
    """Flatten DRF error detail (dicts/lists of ErrorDetail) into one sentence."""
    if isinstance(detail, dict):
        if not detail:
            return "Invalid request"
        name, value = next(iter(detail.items()))
        if name in ("non_field_errors", "detail"):
            name = field
        return _first_message(value, name)
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0], field) if detail else "Invalid request"
    message = str(detail)
    # DRF's stock messages say "this field"; name it.
    if field and "this field" in message.lower():
        return f"{field}: {message}"
    return message


def scriptgenie_exception_handler(exc, context):
    """
    Render every failure as {"error": "..."}.

    Anything DRF does not recognise is logged with its traceback and
    returned as a 500 carrying the exception message.
    """
    if isinstance(exc, GuestLimitExceeded):
        return Response(exc.payload, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception(f"Error in {view.__class__.__name__ if view else 'request'}: {exc}")
        return Response(
            {"error": str(exc) or "An error occurred"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message = _first_message(response.data)

    if response.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {message}")

    response.data = {"error": message}
    return response
