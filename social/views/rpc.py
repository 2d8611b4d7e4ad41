"""Shared plumbing for the `POST /api/<procedure>` function views."""

import functools

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from social.flags import assert_social_enabled
from social.services.rate_limit import enforce_rate_limit
from social.validation import validate_or_raise


def procedure(name, schema=None, *, public=False, social=True, rate_limited=False):
    """
    Turn `fn(request, data)` into a DRF view for the named procedure.

    The payload is validated against `schema` before `fn` runs, and whatever
    `fn` returns becomes the JSON body (`{}` for None). Social procedures fail
    with `SOCIAL_DISABLED` while the feature flag is off.
    """
    def decorator(fn):
        @functools.wraps(fn)
        def view(request):
            if social:
                assert_social_enabled()
            data = validate_or_raise(schema, request.data) if schema else {}
            if rate_limited:
                enforce_rate_limit(request.user, name)
            result = fn(request, data)
            return Response({} if result is None else result)

        view = permission_classes([AllowAny] if public else [IsAuthenticated])(view)
        view = api_view(["POST"])(view)
        view.procedure_name = name
        return view
    return decorator
