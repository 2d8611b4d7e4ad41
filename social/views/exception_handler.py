from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from social.errors import SocialError

DRF_CODES = [
    ((exceptions.NotAuthenticated, exceptions.AuthenticationFailed), "unauthenticated"),
    ((exceptions.PermissionDenied,), "permission-denied"),
    ((exceptions.NotFound,), "not-found"),
    ((exceptions.ValidationError, exceptions.ParseError, exceptions.UnsupportedMediaType), "invalid-argument"),
    ((exceptions.Throttled,), "resource-exhausted"),
    ((exceptions.MethodNotAllowed,), "unimplemented"),
]


def _drf_code(exc):
    for classes, code in DRF_CODES:
        if isinstance(exc, classes):
            return code
    return "internal"


def social_exception_handler(exc, context):
    """Render every API error as `{code, message}`."""
    if isinstance(exc, SocialError):
        return Response(exc.as_payload(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    payload = {"code": _drf_code(exc)}
    if isinstance(exc, exceptions.ValidationError):
        payload["message"] = "VALIDATION_FAILED"
        payload["details"] = response.data
    else:
        payload["message"] = str(getattr(exc, "detail", exc))
    response.data = payload
    return response
